"""
Property Catalog API - FastAPI application entry point.

Stores property listings in MongoDB and exposes CRUD plus filtered,
paginated listing over HTTP for the Streamlit client.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient

from app.api import router
from app.config import get_settings
from app.services.property_repository import PropertyRepository
from app.services.property_service import PropertyService

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the MongoDB client, makes sure the listing index exists and
    publishes the property service on ``app.state``. The client is closed
    on shutdown.
    """
    settings = get_settings()
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    client = AsyncIOMotorClient(settings.mongodb_url, tz_aware=True)
    collection = client[settings.mongodb_database][settings.mongodb_collection]
    repository = PropertyRepository(collection)
    await repository.ensure_indexes()

    app.state.property_service = PropertyService(
        repository,
        max_page_size=settings.max_page_size,
    )
    logger.info(
        "Connected to MongoDB database %s, collection %s",
        settings.mongodb_database,
        settings.mongodb_collection,
    )
    yield
    client.close()
    logger.info("Shutting down %s", settings.app_name)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed input as 400 before anything reaches the store."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "An unexpected error occurred",
            "error": f"{type(exc).__name__}: {exc}",
        },
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="API for managing real estate property listings.",
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Configure CORS for the web client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include API routes
    app.include_router(router)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        """
        Health check endpoint.

        Returns basic application status for monitoring and load balancers.
        """
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# Create the application instance
app = create_app()
