"""
SpeakCoach - public speaking and debate practice backend
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from speakcoach.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    SpeakCoachError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    InvalidInputError: 422,
    NotFoundError: 404,
    PermissionDeniedError: 403,
    ConflictError: 409,
}


async def _handle_speakcoach_error(request: Request, exc: SpeakCoachError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in _STATUS_CODES.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code == 500:
        logger.error(f"[API] unhandled error: {exc}", exc_info=exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(services=None) -> FastAPI:
    """
    Application factory

    :param services: prebuilt Services; built from the global settings when omitted
    """
    from speakcoach.routers import analytics, debate, practice, teams, users
    from speakcoach.services.container import build_services

    app = FastAPI(
        title="SpeakCoach",
        description="Speech practice scoring, debate simulation, teams and progress analytics",
        version="0.1.0",
    )
    if services is None:
        from speakcoach.config import settings
        services = build_services(settings)
    app.state.services = services

    app.add_exception_handler(SpeakCoachError, _handle_speakcoach_error)
    for module in (users, practice, debate, teams, analytics):
        app.include_router(module.router, prefix="/api")
    return app
