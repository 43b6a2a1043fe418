"""
Main entrypoint for the Event Registration API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers that produce the response envelope and
includes the versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``::

    uvicorn event_registration_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.exceptions import RegistrationError
from .core.logging_config import setup_logging


def _envelope(status_code: int, error: str, details=None, headers=None) -> JSONResponse:
    body = {"success": False, "error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate exceptions into ``{success: false, ...}`` responses."""
    logger = logging.getLogger(__name__)

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(request: Request, exc: RegistrationError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return _envelope(exc.status_code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown routes, wrong methods and HTTPExceptions raised by FastAPI itself.
        return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return _envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", details)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        details = str(exc) if settings.debug else None
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred", details)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is configured first so the imports and startup hooks below
    can log.  The database schema is migrated on startup.
    """
    setup_logging(settings.log_level, settings.log_file or None, debug=settings.debug)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"success": True, "status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


app = create_app()
