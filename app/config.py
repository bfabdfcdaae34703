"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv(override=True)


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
        # Allow override from environment variables
        env_prefix="",
    )

    app_name: str = Field(
        default="Bookmark Manager API",
        alias="APP_NAME",
        description="Application title shown in the OpenAPI docs",
    )

    # ===== Database Configuration =====
    database_url: str = Field(
        default="sqlite+aiosqlite:///./bookmarks.db",
        alias="BOOKMARKS_DATABASE_URL",
        description="Application database URL (postgresql:// or sqlite+aiosqlite://)",
    )

    database_echo: bool = Field(
        default=False,
        alias="DATABASE_ECHO",
        description="Log every SQL statement issued by the engine",
    )

    # ===== Session Configuration =====
    session_cookie_name: str = Field(
        default="sid",
        alias="SESSION_COOKIE_NAME",
        description="Name of the cookie carrying the session identifier",
    )

    session_ttl_hours: int = Field(
        default=24 * 7,
        ge=1,
        alias="SESSION_TTL_HOURS",
        description="Lifetime of a login session in hours",
    )

    session_cookie_secure: bool = Field(
        default=False,
        alias="SESSION_COOKIE_SECURE",
        description="Only send the session cookie over HTTPS",
    )

    # ===== Credential Configuration =====
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        alias="BCRYPT_ROUNDS",
        description="bcrypt work factor (log2 of the iteration count)",
    )

    admin_default_password: str = Field(
        default="admin",
        alias="ADMIN_DEFAULT_PASSWORD",
        description="Admin master password seeded on first startup",
    )

    # ===== Pagination Configuration =====
    default_page_size: int = Field(
        default=10,
        ge=1,
        alias="DEFAULT_PAGE_SIZE",
        description="Bookmarks per page when the client does not send a limit",
    )

    max_page_size: int = Field(
        default=100,
        ge=1,
        alias="MAX_PAGE_SIZE",
        description="Upper bound for the limit query parameter",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8080, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",  # Vite dev server default port
            "http://localhost:3000",  # Alternative dev port
            "http://127.0.0.1:5173",  # Local IP variant
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for risky configurations."""

        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")

        if self.admin_default_password == "admin":
            logger.warning(
                "ADMIN_DEFAULT_PASSWORD is the well-known default; change it after first startup."
            )

        if not self.session_cookie_secure:
            logger.warning("SESSION_COOKIE_SECURE is off; the session cookie is sent over plain HTTP.")

        if self.database_url.startswith("sqlite"):
            logger.debug("Using SQLite application database.")

        return self

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_hours * 3600


# Global settings instance
settings = Settings()
