"""FastAPI application for PDF Cover Studio.

This module initializes the FastAPI app with CORS middleware and routes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import documents_router, templates_router
from src.api.schemas.responses import HealthResponse
from src.config.settings import get_settings
from src.core.database import get_db_session, init_db
from src.services.template_service import seed_templates
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"

settings = get_settings()
ENVIRONMENT = settings.environment
IS_PRODUCTION = ENVIRONMENT == "production"

DEV_CORS_ORIGINS = [
    "http://localhost:3000",  # React dev server
    "http://localhost:5173",  # Vite default port
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    setup_logging(
        level=settings.logging.level,
        log_format=settings.logging.format,
        log_file=settings.logging.log_file,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
    )
    logger.info(f"Starting PDF Cover Studio API (environment: {ENVIRONMENT})")

    if settings.database.auto_init:
        init_db()
        with get_db_session() as db:
            seed_templates(db)
        logger.info("Database initialized")

    if not settings.suggestion_configured:
        logger.warning("Azure OpenAI credentials not set, content suggestions disabled")

    yield
    # Shutdown
    logger.info("Shutting down PDF Cover Studio API")


# Initialize FastAPI app
app = FastAPI(
    title="PDF Cover Studio API",
    description="Replace the cover page of a PDF with a generated, templated cover",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS only for development
if not IS_PRODUCTION:
    logger.info("Development mode: enabling CORS")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins or DEV_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include API routers
app.include_router(documents_router)
app.include_router(templates_router)


@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="healthy", environment=ENVIRONMENT, version=APP_VERSION)
