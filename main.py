#!/usr/bin/env python3

"""
Main application entry point for the bookmark manager API.

Architecture: FastAPI application over an injected async SQLAlchemy database.
Key Features: Lifecycle management, admin password seeding, error rendering,
CORS configuration.
"""

import errno
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.admin import router as admin_router
from app.api.auth import router as auth_router
from app.api.bookmarks import router as bookmarks_router
from app.api.tokens import router as tokens_router
from app.config import Settings, settings as default_settings
from app.db import Database
from app.db_handlers.session import SessionDBHandler
from app.db_handlers.system_setting import SystemSettingDBHandler
from app.errors import AppError
from app.services.admin import seed_admin_password
from app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build (or adopt) the database, create tables, seed the admin password and
    dispose of the engine on shutdown.
    """
    logger.info("Application startup...")
    settings: Settings = app.state.settings
    owns_database = app.state.database is None
    try:
        if owns_database:
            app.state.database = Database(settings.database_url, echo=settings.database_echo)
        database: Database = app.state.database

        logger.info("Initializing database...")
        await database.init_db()

        logger.info("Checking database connectivity...")
        await database.check_connection()

        await seed_admin_password(
            SystemSettingDBHandler(database.session_factory),
            settings.admin_default_password,
            settings.bcrypt_rounds,
        )
        await SessionDBHandler(database.session_factory).purge_expired()
    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info(f"{settings.app_name} startup successful.")
    yield

    logger.info(f"{settings.app_name} shutdown...")
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None
    logger.info("Shutdown complete.")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        content = {"message": first.get("msg", "Invalid request")}
        location = [str(part) for part in first.get("loc", ()) if part != "body"]
        if location:
            content["field"] = location[-1]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(f"OSError caught: {exc}, errno: {exc.errno}", exc_info=exc)
        if exc.errno in [errno.ETIMEDOUT, errno.ECONNREFUSED]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"message": app.state.settings.db_unavailable_hint},
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(settings: Settings | None = None, database: Database | None = None):
    settings = settings or default_settings
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(bookmarks_router)
    app.include_router(tokens_router)
    app.include_router(admin_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.get("/health", tags=["System"])
    async def health_check():
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


def main():
    port = int(default_settings.server_port)
    host = default_settings.server_host

    logger.info(f"Starting {default_settings.app_name} on {host}:{port}")

    try:
        uvicorn.run(
            "main:app" if default_settings.server_workers > 1 else app,
            host=host,
            port=port,
            workers=default_settings.server_workers,
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
