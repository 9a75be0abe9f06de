"""
app/api/routers/step_scaling.py

Step scaling planning endpoint.

Validates a policy configuration and returns the normalized intervals and
the alarm/action pairs it would create. Nothing is provisioned.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.step_scaling import (
    ScalingConfigErrorResponse,
    StepScalingPlanRequest,
    StepScalingPlanResponse,
)
from app.services.step_scaling_service import StepScalingPlanService, get_step_scaling_plan_service
from scaling.errors import ScalingConfigError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/step-scaling", tags=["step-scaling"])

_UNPROCESSABLE = 422


@router.post(
    "/plan",
    response_model=StepScalingPlanResponse,
    status_code=status.HTTP_200_OK,
    responses={_UNPROCESSABLE: {"model": ScalingConfigErrorResponse}},
)
def plan_step_scaling(
    body: StepScalingPlanRequest,
    service: StepScalingPlanService = Depends(get_step_scaling_plan_service),
) -> StepScalingPlanResponse:
    """
    Plan a step scaling policy.

    Raises HTTP 422 with ``{"code", "message", "context"}`` when the
    configuration is rejected.
    """
    try:
        return service.plan(body)
    except ScalingConfigError as exc:
        logger.info("Rejected step scaling configuration code=%s: %s", exc.code, exc.message)
        raise HTTPException(
            status_code=_UNPROCESSABLE,
            detail=exc.to_dict(),
        ) from exc
