"""FastAPI application definition."""

from __future__ import annotations

import asyncpg
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agencyportal import __version__
from agencyportal.core.exceptions import AuthenticationError, PortalError, UpstreamError

from .deps import lifespan, settings
from .routes import api_router

logger = structlog.get_logger()


async def portal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer a PortalError with its status code and message."""
    assert isinstance(exc, PortalError)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    if isinstance(exc, UpstreamError):
        logger.error("upstream_error", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer an invalid request body or query with 400 and the first reason."""
    assert isinstance(exc, RequestValidationError)
    errors = exc.errors()
    detail = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        detail = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"detail": detail})


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log a database failure and answer with a generic message."""
    logger.error(
        "database_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=400, content={"detail": "Database operation failed"})


def create_app() -> FastAPI:
    """Build the API application."""
    application = FastAPI(
        title="agencyportal",
        description="Agency client portal API",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,  # Prevent 307 redirects that lose auth headers
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(PortalError, portal_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(asyncpg.PostgresError, database_error_handler)

    application.include_router(api_router, prefix="/api")

    @application.get("/api/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return application


app = create_app()
