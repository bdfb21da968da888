"""
FastAPI application for the coaching schedule API.

``create_app`` builds a fully wired app from a ``Settings``; the module-level
``app`` is the one uvicorn serves. Tests build their own with test settings
and replace repository providers through ``app.dependency_overrides``.

    from backend.main import create_app
    from backend.settings import Settings

    app = create_app(Settings(environment="test", _env_file=None))
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.exceptions import CoachingError
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the app: error reporting, CORS, error mapping and routers.

    Args:
        settings: Settings to use; defaults to ``get_settings()``.
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="Coaching Schedule API",
        description="Workout catalog, client assignments and calendar projection",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _register_exception_handlers(app)
    _include_routers(app)
    _log_feature_flags(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Report unhandled errors to Sentry when a DSN is set."""
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        send_default_pii=False,
    )
    logger.info(f"Sentry enabled for coaching-schedule-api ({settings.environment})")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the local trainer portal plus any configured origins."""
    origins = [] if settings.is_production else ["http://localhost:3000"]
    origins.extend(settings.cors_origins_list)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """
    Map service errors to HTTP responses.

    Every error body is ``{"error": kind, "detail": message}``.
    """

    @app.exception_handler(CoachingError)
    async def coaching_error_handler(request: Request, exc: CoachingError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(
                f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}"
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        fields = sorted({".".join(str(p) for p in e.get("loc", [])[1:]) for e in errors} - {""})
        message = "Invalid request"
        if fields:
            message = f"Invalid or missing fields: {', '.join(fields)}"
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "detail": message, "errors": errors},
        )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        assignments_router,
        clients_router,
        exercises_router,
        health_router,
        programs_router,
        workouts_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    app.include_router(exercises_router)
    # IMPORTANT: assignments_router MUST come before workouts_router and
    # programs_router so /workouts/assign matches before /workouts/{workout_id}
    app.include_router(assignments_router)
    app.include_router(workouts_router)
    app.include_router(programs_router)
    app.include_router(clients_router)


def _log_feature_flags(settings: Settings) -> None:
    """Log the status of feature flags at startup."""
    if settings.enforce_unique_assignments:
        logger.info("ENFORCE_UNIQUE_ASSIGNMENTS is active")
    else:
        logger.info("ENFORCE_UNIQUE_ASSIGNMENTS is disabled (duplicate same-day assignments allowed)")


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
