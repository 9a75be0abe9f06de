"""
app/api/routers package marker.
"""

from app.api.routers.step_scaling import router as step_scaling_router

__all__ = [
    "step_scaling_router",
]
