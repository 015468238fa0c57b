"""Main application entry point with FastAPI."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .config import get_settings
from .database import check_database_health, dispose_engine, init_db
from .errors import register_exception_handlers
from .routers import ALL_ROUTERS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment():
    """Validate all required environment variables on startup."""
    try:
        settings = get_settings()
        logger.info("Environment variables validated successfully")
        return settings
    except ValidationError as e:
        logger.error("ERROR: Missing or invalid environment variables:")
        logger.error(str(e))
        sys.exit(1)


settings = validate_environment()
logging.getLogger().setLevel(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    # Startup
    logger.info("Starting Recipe API...")

    if settings.auto_create_tables:
        init_db()
        logger.info("Database tables created")

    logger.info("Recipe API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Recipe API...")
    dispose_engine()
    logger.info("Recipe API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Recipe API",
    description="Recipes, users, categories and orders",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for router in ALL_ROUTERS:
    app.include_router(router)


@app.get("/health")
def health_check():
    """Health check endpoint.

    Verifies database connection and returns status.
    """
    db_healthy = check_database_health()

    if db_healthy:
        return {
            "status": "healthy",
            "database": "connected",
        }
    else:
        return {
            "status": "unhealthy",
            "database": "disconnected",
        }


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "Recipe API",
        "status": "running",
        "version": "1.0.0",
    }
