"""
scaling/base.py

Contracts for the collaborators a step scaling policy hands its ladders to.

The alarm subsystem and the capacity-adjustment executor live outside this
package. Implementations receive fully validated values only; the policy
never creates a sink before every ladder has been built.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from scaling.metric import Metric, MetricAggregationType

if TYPE_CHECKING:
    from scaling.ladder import AdjustmentRecord, Comparison


class AdjustmentType(str, Enum):
    """How the ``change`` of each scaling interval is interpreted."""

    CHANGE_IN_CAPACITY = "ChangeInCapacity"
    PERCENT_CHANGE_IN_CAPACITY = "PercentChangeInCapacity"
    EXACT_CAPACITY = "ExactCapacity"

    @property
    def is_absolute(self) -> bool:
        return self is AdjustmentType.EXACT_CAPACITY


@dataclass(frozen=True)
class ActionConfig:
    """
    Construction settings for one scaling action.

    ``cooldown_sec`` and ``min_adjustment_magnitude`` are passed through
    untouched; ``scaling_target`` is an opaque handle to the resource.
    """

    adjustment_type: AdjustmentType
    metric_aggregation_type: MetricAggregationType
    scaling_target: Any
    cooldown_sec: int | None = None
    min_adjustment_magnitude: int | None = None


@dataclass(frozen=True)
class AlarmConfig:
    """Construction settings for one threshold alarm."""

    metric: Metric
    description: str
    evaluation_periods: int = 1


class ActionSink(ABC):
    """Receives the ordered adjustments of one ladder."""

    @abstractmethod
    def add_adjustment(self, record: AdjustmentRecord) -> None:
        raise NotImplementedError("Subclasses must implement add_adjustment()")


class AlarmSink(ABC):
    """Evaluates the metric against a threshold and triggers an action."""

    @abstractmethod
    def set_threshold(self, value: float) -> None:
        raise NotImplementedError("Subclasses must implement set_threshold()")

    @abstractmethod
    def set_comparison(self, comparison: Comparison) -> None:
        raise NotImplementedError("Subclasses must implement set_comparison()")

    @abstractmethod
    def on_trigger(self, action: ActionSink) -> None:
        raise NotImplementedError("Subclasses must implement on_trigger()")


class SinkFactory(ABC):
    """Creates the alarm and action collaborators for each ladder."""

    @abstractmethod
    def create_action(self, name: str, config: ActionConfig) -> ActionSink:
        raise NotImplementedError("Subclasses must implement create_action()")

    @abstractmethod
    def create_alarm(self, name: str, config: AlarmConfig) -> AlarmSink:
        raise NotImplementedError("Subclasses must implement create_alarm()")
