"""
scaling/policy.py

Builds a step scaling policy: normalizes the configured intervals, locates
the ladder anchors and wires zero, one or two alarm/action pairs.

Contains no interval math of its own; it delegates to
:mod:`scaling.intervals`, :mod:`scaling.pivot` and :mod:`scaling.ladder`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from scaling.base import (
    ActionConfig,
    ActionSink,
    AdjustmentType,
    AlarmConfig,
    AlarmSink,
    SinkFactory,
)
from scaling.errors import InvalidCooldownError
from scaling.intervals import NormalizedInterval, ScalingInterval, normalize_intervals
from scaling.ladder import Direction, Ladder, attach_ladder, build_ladder
from scaling.metric import Metric, aggregation_type_from_metric
from scaling.pivot import locate_anchors

logger = logging.getLogger(__name__)

# Recommended by AutoScaling
ALARM_PERIOD_SEC = 60
ALARM_EVALUATION_PERIODS = 1

LOWER_ACTION_NAME = "LowerPolicy"
LOWER_ALARM_NAME = "LowerAlarm"
UPPER_ACTION_NAME = "UpperPolicy"
UPPER_ALARM_NAME = "UpperAlarm"


@dataclass(frozen=True)
class StepScalingPolicyProps:
    """
    Construction-time configuration of a step scaling policy.
    """

    metric: Metric
    scaling_steps: Sequence[ScalingInterval]
    scaling_target: Any
    adjustment_type: AdjustmentType = AdjustmentType.CHANGE_IN_CAPACITY
    cooldown_sec: int | None = None
    min_adjustment_magnitude: int | None = None


@dataclass(frozen=True)
class StepScalingPolicy:
    """
    Result of building a policy.

    Each side's ladder, alarm and action are either all present or all
    ``None``.
    """

    intervals: tuple[NormalizedInterval, ...]
    lower_ladder: Ladder | None = None
    lower_alarm: AlarmSink | None = None
    lower_action: ActionSink | None = None
    upper_ladder: Ladder | None = None
    upper_alarm: AlarmSink | None = None
    upper_action: ActionSink | None = None


def build_step_scaling_policy(props: StepScalingPolicyProps, factory: SinkFactory) -> StepScalingPolicy:
    """
    Validate *props* and construct the alarm/action pairs via *factory*.

    Every ladder is built before the first sink is created, so a
    configuration error never leaves partially constructed collaborators
    behind.

    Raises:
        ScalingConfigError: Any subclass, for invalid intervals, statistic
            or cooldown.
    """
    if props.cooldown_sec is not None and props.cooldown_sec < 0:
        raise InvalidCooldownError(
            f"cooldown_sec must not be negative, got {props.cooldown_sec}.",
            context={"cooldown_sec": props.cooldown_sec},
        )
    if (
        props.min_adjustment_magnitude is not None
        and props.adjustment_type is not AdjustmentType.PERCENT_CHANGE_IN_CAPACITY
    ):
        logger.warning(
            "min_adjustment_magnitude=%s has no effect with adjustment_type=%s",
            props.min_adjustment_magnitude,
            props.adjustment_type.value,
        )

    aggregation = aggregation_type_from_metric(props.metric)
    absolute = props.adjustment_type.is_absolute

    intervals = normalize_intervals(props.scaling_steps, absolute)
    anchors = locate_anchors(intervals, absolute=absolute)

    lower_ladder = None
    if anchors.lower_anchor_index is not None:
        lower_ladder = build_ladder(intervals, anchors.lower_anchor_index, Direction.DOWN)
    upper_ladder = None
    if anchors.upper_anchor_index is not None:
        upper_ladder = build_ladder(intervals, anchors.upper_anchor_index, Direction.UP)

    if not anchors.has_alarms:
        logger.warning(
            "No scaling interval for metric %s/%s carries an adjustment; no alarms created",
            props.metric.namespace,
            props.metric.metric_name,
        )

    action_config = ActionConfig(
        adjustment_type=props.adjustment_type,
        metric_aggregation_type=aggregation,
        scaling_target=props.scaling_target,
        cooldown_sec=props.cooldown_sec,
        min_adjustment_magnitude=props.min_adjustment_magnitude,
    )
    alarm_metric = props.metric.with_period(ALARM_PERIOD_SEC)

    lower_alarm = lower_action = None
    if lower_ladder is not None:
        lower_action = factory.create_action(LOWER_ACTION_NAME, action_config)
        lower_alarm = factory.create_alarm(
            LOWER_ALARM_NAME,
            AlarmConfig(
                metric=alarm_metric,
                description="Lower threshold scaling alarm",
                evaluation_periods=ALARM_EVALUATION_PERIODS,
            ),
        )
        attach_ladder(lower_ladder, lower_alarm, lower_action)

    upper_alarm = upper_action = None
    if upper_ladder is not None:
        upper_action = factory.create_action(UPPER_ACTION_NAME, action_config)
        upper_alarm = factory.create_alarm(
            UPPER_ALARM_NAME,
            AlarmConfig(
                metric=alarm_metric,
                description="Upper threshold scaling alarm",
                evaluation_periods=ALARM_EVALUATION_PERIODS,
            ),
        )
        attach_ladder(upper_ladder, upper_alarm, upper_action)

    logger.info(
        "Built step scaling policy metric=%s/%s intervals=%d lower_threshold=%s upper_threshold=%s",
        props.metric.namespace,
        props.metric.metric_name,
        len(intervals),
        lower_ladder.threshold if lower_ladder else None,
        upper_ladder.threshold if upper_ladder else None,
    )

    return StepScalingPolicy(
        intervals=tuple(intervals),
        lower_ladder=lower_ladder,
        lower_alarm=lower_alarm,
        lower_action=lower_action,
        upper_ladder=upper_ladder,
        upper_alarm=upper_alarm,
        upper_action=upper_action,
    )
