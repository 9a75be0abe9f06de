"""
app/services package marker.
"""

from app.services.step_scaling_service import (
    StepScalingPlanService,
    TooManyIntervalsError,
    get_step_scaling_plan_service,
)

__all__ = [
    "StepScalingPlanService",
    "TooManyIntervalsError",
    "get_step_scaling_plan_service",
]
