# =============================================================================
# Application Settings
# =============================================================================
"""
Pydantic Settings configuration for the Resume Builder API.

Loads configuration from environment variables with validation and type safety.
"""

import os
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Environment variables set by the serverless platforms we deploy to
SERVERLESS_ENV_MARKERS = ("AWS_LAMBDA_FUNCTION_NAME", "VERCEL", "NETLIFY")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    The .env file is automatically loaded if present.

    Attributes:
        app_name: Name of the application.
        app_env: Current environment (development, staging, production).
        debug: Enable debug mode (exposes API docs and SQL echo).
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        api_host: Host address for the API server.
        api_port: Port number for the API server.
        cors_origins: Comma-separated list of allowed CORS origins.
        postgres_db: PostgreSQL database name.
        postgres_user: PostgreSQL username.
        postgres_password: PostgreSQL password.
        postgres_host: PostgreSQL host address.
        postgres_port: PostgreSQL port number.
        database_url_override: Full SQLAlchemy URL, replaces the postgres_* parts.
        database_auto_create: Create missing tables on startup.
        supabase_url: Base URL of the Supabase project.
        supabase_key: Supabase API key used by the auth client.
        frontend_url: Public URL of the web client.
        pdf_render_timeout: Seconds allowed for a PDF render.
        pdf_serverless: Force serverless browser flags (auto-detected if unset).
        chromium_executable_path: Chromium binary used in serverless mode.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="resume-builder-api",
        description="Name of the application"
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # -------------------------------------------------------------------------
    # API Settings
    # -------------------------------------------------------------------------
    api_host: str = Field(
        default="0.0.0.0",
        description="Host address for the API server"
    )
    api_port: int = Field(
        default=3001,
        description="Port number for the API server"
    )
    cors_origins: str = Field(
        default=(
            "https://resumebuildr.org,https://www.resumebuildr.org,"
            "http://localhost:3000"
        ),
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    postgres_db: str = Field(
        default="resume_builder",
        description="PostgreSQL database name"
    )
    postgres_user: str = Field(
        default="postgres",
        description="PostgreSQL username"
    )
    postgres_password: str = Field(
        default="",
        description="PostgreSQL password"
    )
    postgres_host: str = Field(
        default="localhost",
        description="PostgreSQL host address"
    )
    postgres_port: int = Field(
        default=5432,
        description="PostgreSQL port number"
    )
    database_url_override: Optional[str] = Field(
        default=None,
        description="Full database URL; takes precedence over postgres_* settings"
    )
    database_auto_create: bool = Field(
        default=False,
        description="Create tables on startup (local development only)"
    )

    # -------------------------------------------------------------------------
    # Identity Provider Settings
    # -------------------------------------------------------------------------
    supabase_url: str = Field(
        default="",
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        default="",
        description="Supabase API key"
    )

    # -------------------------------------------------------------------------
    # Frontend Settings
    # -------------------------------------------------------------------------
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Public URL of the web client"
    )

    # -------------------------------------------------------------------------
    # PDF Export Settings
    # -------------------------------------------------------------------------
    pdf_render_timeout: float = Field(
        default=30.0,
        description="Seconds allowed for loading and rendering a PDF"
    )
    pdf_serverless: Optional[bool] = Field(
        default=None,
        description="Use serverless browser flags; auto-detected when unset"
    )
    chromium_executable_path: Optional[str] = Field(
        default=None,
        description="Chromium binary to launch in serverless environments"
    )

    # -------------------------------------------------------------------------
    # Model Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def database_url(self) -> str:
        """
        Construct the database URL from individual components.

        Returns:
            SQLAlchemy connection URL string.
        """
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS origins string into a list.

        Returns:
            List of allowed origin strings.
        """
        return [
            origin.strip()
            for origin in self.cors_origins.split(",")
            if origin.strip()
        ]

    @property
    def is_serverless(self) -> bool:
        """
        Whether the process runs on a serverless platform.

        Returns:
            The explicit pdf_serverless setting, or True if a known
            serverless environment marker is present.
        """
        if self.pdf_serverless is not None:
            return self.pdf_serverless
        return any(os.environ.get(marker) for marker in SERVERLESS_ENV_MARKERS)

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("frontend_url", "supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """
        Normalize URLs so paths can be appended with a single slash.

        Args:
            v: The URL value.

        Returns:
            The URL without trailing slashes.
        """
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()
