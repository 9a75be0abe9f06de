"""
scaling/recorder.py

In-memory alarm and action sinks.

They only record what the policy hands them, which makes them suitable
for rendering a plan and for tests. No metric is ever evaluated.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from scaling.base import ActionConfig, ActionSink, AlarmConfig, AlarmSink, SinkFactory
from scaling.ladder import AdjustmentRecord, Comparison


class RecordingAction(ActionSink):
    """Collects adjustments in the order they were added."""

    def __init__(self, name: str, config: ActionConfig) -> None:
        self.name = name
        self.config = config
        self.adjustments: list[AdjustmentRecord] = []

    def add_adjustment(self, record: AdjustmentRecord) -> None:
        self.adjustments.append(record)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "adjustment_type": self.config.adjustment_type.value,
            "metric_aggregation_type": self.config.metric_aggregation_type.value,
            "cooldown_sec": self.config.cooldown_sec,
            "min_adjustment_magnitude": self.config.min_adjustment_magnitude,
            "scaling_target": self.config.scaling_target,
            "adjustments": [asdict(record) for record in self.adjustments],
        }


class RecordingAlarm(AlarmSink):
    """Remembers its threshold, comparison and the actions it triggers."""

    def __init__(self, name: str, config: AlarmConfig) -> None:
        self.name = name
        self.config = config
        self.threshold: float | None = None
        self.comparison: Comparison | None = None
        self.actions: list[ActionSink] = []

    def set_threshold(self, value: float) -> None:
        self.threshold = value

    def set_comparison(self, comparison: Comparison) -> None:
        self.comparison = comparison

    def on_trigger(self, action: ActionSink) -> None:
        self.actions.append(action)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.config.description,
            "threshold": self.threshold,
            "comparison": self.comparison.value if self.comparison else None,
            "period_sec": self.config.metric.period_sec,
            "evaluation_periods": self.config.evaluation_periods,
            "actions": [
                action.to_dict() if isinstance(action, RecordingAction) else {"name": repr(action)}
                for action in self.actions
            ],
        }


class RecordingSinkFactory(SinkFactory):
    """Creates recording sinks and keeps them by name, in creation order."""

    def __init__(self) -> None:
        self.actions: dict[str, RecordingAction] = {}
        self.alarms: dict[str, RecordingAlarm] = {}

    def create_action(self, name: str, config: ActionConfig) -> RecordingAction:
        action = RecordingAction(name, config)
        self.actions[name] = action
        return action

    def create_alarm(self, name: str, config: AlarmConfig) -> RecordingAlarm:
        alarm = RecordingAlarm(name, config)
        self.alarms[name] = alarm
        return alarm
