"""
FastAPI application factory.

Creates and configures the FastAPI application instance: logging, storage
check, admin seed, error mapping, CORS and routes.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from shared.config import Settings, get_settings
from shared.exceptions import StacksError, StorageError
from modules.auth.routes import router as auth_router
from modules.auth.seed import ensure_admin_seed
from modules.profile.routes import router as profile_router

from .dependencies import get_container
from .routes import admin, health, library

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. An unreachable store aborts startup.
    """
    # Startup
    container = get_container()
    settings = container.settings
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    await run_in_threadpool(container.check_storage)

    if settings.auto_seed_admin:
        await run_in_threadpool(
            ensure_admin_seed,
            container.users,
            container.hasher,
            settings.admin_email_list,
            settings.admin_seed_name,
            settings.admin_seed_password,
        )

    # A misconfigured email transport fails startup
    mailer = container.mailer

    yield

    # Shutdown
    await mailer.drain()
    logger.info(f"Shutting down {settings.app_name}")


async def stacks_error_handler(request: Request, exc: StacksError) -> JSONResponse:
    """Map domain exceptions to `{error, message, details}` responses."""
    if isinstance(exc, StorageError):
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc.code} {exc.details}")
        return server_error_response()

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": "Request validation failed",
            "details": {"issues": errors},
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return server_error_response()


def server_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "server_error", "message": "Internal server error", "details": {}},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    prefix = settings.api_prefix.rstrip("/")

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, email verification and product entitlements",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if settings.debug else None,
        redoc_url=f"{prefix}/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Error mapping
    app.add_exception_handler(StacksError, stacks_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(profile_router, prefix=f"{prefix}/profile", tags=["profile"])
    app.include_router(library.router, prefix=f"{prefix}/library", tags=["library"])
    app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
