"""
app/services/step_scaling_service.py

Renders the alarm/action plan of a step scaling configuration.

Converts API schemas into core value objects, builds the policy against
in-memory recording sinks and serializes what the sinks received. No
alarm or action is created anywhere outside this process.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.config import get_api_settings
from app.schemas.step_scaling import (
    AlarmResponse,
    NormalizedIntervalResponse,
    StepScalingPlanRequest,
    StepScalingPlanResponse,
)
from scaling.errors import ScalingConfigError
from scaling.intervals import ScalingInterval
from scaling.metric import Metric
from scaling.policy import StepScalingPolicyProps, build_step_scaling_policy
from scaling.recorder import RecordingSinkFactory

logger = logging.getLogger(__name__)


class TooManyIntervalsError(ScalingConfigError):
    """Raised when a request carries more scaling steps than the API allows."""

    code = "too_many_intervals"


class StepScalingPlanService:
    """
    Stateless planner; every call builds an independent policy.
    """

    def __init__(self, *, max_scaling_steps: int) -> None:
        self._max_scaling_steps = max_scaling_steps

    def plan(self, request: StepScalingPlanRequest) -> StepScalingPlanResponse:
        """
        Build the policy described by *request* and return its plan.

        Raises:
            ScalingConfigError: For any invalid configuration, including
                more steps than ``max_scaling_steps``.
        """

        if len(request.scaling_steps) > self._max_scaling_steps:
            raise TooManyIntervalsError(
                f"At most {self._max_scaling_steps} scaling steps are allowed, "
                f"got {len(request.scaling_steps)}.",
                context={"count": len(request.scaling_steps), "limit": self._max_scaling_steps},
            )

        props = to_policy_props(request)
        factory = RecordingSinkFactory()
        policy = build_step_scaling_policy(props, factory)

        alarms = [AlarmResponse.model_validate(alarm.to_dict()) for alarm in factory.alarms.values()]
        logger.info(
            "Planned step scaling metric=%s/%s alarms=%d",
            props.metric.namespace,
            props.metric.metric_name,
            len(alarms),
        )
        return StepScalingPlanResponse(
            intervals=[
                NormalizedIntervalResponse(lower=i.lower, upper=i.upper, change=i.change)
                for i in policy.intervals
            ],
            alarms=alarms,
        )


def to_policy_props(request: StepScalingPlanRequest) -> StepScalingPolicyProps:
    """Map a validated request onto core policy props."""

    return StepScalingPolicyProps(
        metric=Metric(
            namespace=request.metric.namespace,
            metric_name=request.metric.metric_name,
            statistic=request.metric.statistic,
            dimensions=dict(request.metric.dimensions),
        ),
        scaling_steps=[
            ScalingInterval(change=step.change, lower=step.lower, upper=step.upper)
            for step in request.scaling_steps
        ],
        scaling_target=request.scaling_target,
        adjustment_type=request.adjustment_type,
        cooldown_sec=request.cooldown_sec,
        min_adjustment_magnitude=request.min_adjustment_magnitude,
    )


@lru_cache(maxsize=1)
def get_step_scaling_plan_service() -> StepScalingPlanService:
    """
    Build and cache the planning service with env-driven settings.
    """
    settings = get_api_settings()
    return StepScalingPlanService(max_scaling_steps=settings.max_scaling_steps)
