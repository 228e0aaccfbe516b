# =============================================================================
# FastAPI Application Entry Point
# =============================================================================
"""
Main FastAPI application for the Resume Builder API.

This module creates and configures the FastAPI application instance,
including middleware, routes, and exception handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_api import __version__
from resume_api.api.errors import register_exception_handlers
from resume_api.api.routes import auth, export, health, resumes, sharing, users, versions
from resume_api.config import get_settings
from resume_api.database import DatabaseConfig, DatabaseManager
from resume_api.services.identity_client import SupabaseAuthClient
from resume_api.services.pdf_service import PdfRenderer


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Lifespan Management
# -----------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan events.

    Handles startup and shutdown procedures including:
    - Database connection initialization
    - Identity provider client creation
    - Resource cleanup on shutdown

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Debug mode: {settings.debug}")

    # -------------------------------------------------------------------------
    # Initialize Database Connection
    # -------------------------------------------------------------------------
    db = DatabaseManager(DatabaseConfig(url=settings.database_url, echo=settings.debug))
    await db.connect()
    if settings.database_auto_create:
        await db.create_schema()
    app.state.db = db
    logger.info("Database connection initialized")

    # -------------------------------------------------------------------------
    # Initialize Identity Provider Client
    # -------------------------------------------------------------------------
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning(
            "SUPABASE_URL or SUPABASE_KEY not set. Authenticated routes will fail."
        )
    identity = SupabaseAuthClient(
        base_url=settings.supabase_url,
        api_key=settings.supabase_key,
    )
    app.state.identity = identity

    # -------------------------------------------------------------------------
    # Initialize PDF Renderer
    # -------------------------------------------------------------------------
    app.state.pdf_renderer = PdfRenderer(
        timeout_seconds=settings.pdf_render_timeout,
        serverless=settings.is_serverless,
        executable_path=settings.chromium_executable_path,
    )
    logger.info(f"PDF renderer ready (serverless: {settings.is_serverless})")

    yield

    # -------------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------------
    logger.info("Shutting down application...")

    await identity.close()
    logger.info("Identity client closed")

    await db.disconnect()
    logger.info("Database connection closed")


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Resume Builder API",
        description=(
            "Backend for the resume builder: resume storage, version history, "
            "public sharing links and PDF export."
        ),
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    # -------------------------------------------------------------------------
    # Middleware Configuration
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    register_exception_handlers(app)

    # -------------------------------------------------------------------------
    # Route Registration
    # -------------------------------------------------------------------------
    app.include_router(health.router)
    app.include_router(auth.router)

    # PDF export before the resume routes so /resumes/export is not read as an id
    app.include_router(export.router)
    app.include_router(resumes.router)
    app.include_router(versions.router)
    app.include_router(sharing.router)
    app.include_router(users.router)

    return app


# -----------------------------------------------------------------------------
# Application Instance
# -----------------------------------------------------------------------------
app = create_app()
