"""
app/schemas package marker.
"""

from app.schemas.step_scaling import (
    AlarmResponse,
    ScalingConfigErrorResponse,
    StepScalingPlanRequest,
    StepScalingPlanResponse,
)

__all__ = [
    "AlarmResponse",
    "ScalingConfigErrorResponse",
    "StepScalingPlanRequest",
    "StepScalingPlanResponse",
]
