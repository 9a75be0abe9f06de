"""
app/schemas/step_scaling.py

Request and response schemas for the step scaling planning endpoint.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from scaling.base import AdjustmentType


class ScalingStepRequest(BaseModel):
    """
    One user-authored scaling interval. Either bound may be omitted.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    lower: float | None = None
    upper: float | None = None
    change: float


class MetricRequest(BaseModel):
    """
    Metric the policy scales on.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    namespace: str = Field(min_length=1)
    metric_name: str = Field(min_length=1)
    statistic: str = Field(default="Average", min_length=1)
    dimensions: dict[str, str] = Field(default_factory=dict)


class StepScalingPlanRequest(BaseModel):
    """
    Full construction-time configuration of a step scaling policy.
    """

    model_config = ConfigDict(extra="forbid")

    metric: MetricRequest
    scaling_steps: list[ScalingStepRequest]
    scaling_target: str = Field(min_length=1)
    adjustment_type: AdjustmentType = AdjustmentType.CHANGE_IN_CAPACITY
    cooldown_sec: int | None = None
    min_adjustment_magnitude: int | None = None


class NormalizedIntervalResponse(BaseModel):
    """
    One interval of the normalized partition. ``None`` bounds are unbounded.
    """

    lower: float | None
    upper: float | None
    change: float | None


class AdjustmentResponse(BaseModel):
    adjustment: float
    lower_bound: float | None = None
    upper_bound: float | None = None


class ActionResponse(BaseModel):
    name: str
    adjustment_type: AdjustmentType
    metric_aggregation_type: Literal["Average", "Minimum", "Maximum"]
    cooldown_sec: int | None = None
    min_adjustment_magnitude: int | None = None
    scaling_target: Any
    adjustments: list[AdjustmentResponse] = Field(default_factory=list)


class AlarmResponse(BaseModel):
    name: str
    description: str
    threshold: float
    comparison: Literal["<=", ">="]
    period_sec: int = Field(..., ge=1)
    evaluation_periods: int = Field(..., ge=1)
    actions: list[ActionResponse] = Field(default_factory=list)


class StepScalingPlanResponse(BaseModel):
    """
    Normalized intervals plus zero, one or two alarm/action pairs.
    """

    intervals: list[NormalizedIntervalResponse]
    alarms: list[AlarmResponse] = Field(default_factory=list)


class ScalingConfigErrorResponse(BaseModel):
    code: str
    message: str
    context: dict[str, Any] = Field(default_factory=dict)
