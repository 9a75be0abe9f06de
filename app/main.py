from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import get_api_settings


class HealthResponse(BaseModel):
    status: str


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report schema errors without echoing the rejected input.

    A NaN or infinite input value cannot be written as strict JSON.
    """

    errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_api_settings().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()
    settings = get_api_settings()

    application = FastAPI(
        title=settings.title,
        version="1.0.0",
    )
    application.add_exception_handler(RequestValidationError, _request_validation_handler)

    from app.api.routers import step_scaling_router

    application.include_router(step_scaling_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok")

    logging.getLogger(__name__).info(
        "Step scaling API ready max_scaling_steps=%d", settings.max_scaling_steps
    )
    return application


app = create_app()
