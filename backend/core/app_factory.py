"""
Application factory for creating FastAPI app instances.

This module provides functions for creating and configuring the FastAPI application
with all necessary middleware, routers, and dependencies.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from infrastructure.database import Database
from sdk.client.llm_client import LLMClient
from services.generation_service import GenerationService
from services.ingestion_service import IngestionService
from sqlalchemy.exc import SQLAlchemyError

from core import get_logger, get_settings
from core.settings import Settings

logger = get_logger("AppFactory")


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report unexpected store failures as 503 instead of a bare 500."""
    logger.error(f"❌ Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Entry store is unavailable"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    llm_client: Optional[LLMClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the settings singleton)
        database: Database to use (defaults to one built from settings.database_url)
        llm_client: Language model client (defaults to one built from settings)

    Returns:
        Configured FastAPI application instance
    """
    from fastapi.middleware.cors import CORSMiddleware
    from infrastructure.auth import AuthMiddleware, validate_auth_configuration
    from routers import auth, entries, exports, generation, ingest, search
    from slowapi import Limiter, _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded
    from slowapi.util import get_remote_address

    settings = settings or get_settings()

    # Create lifespan context manager
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for application startup and shutdown."""
        # Startup
        logger.info("🚀 Application startup...")

        validate_auth_configuration()

        # Connect the entry store (creates tables on first run)
        db = database or Database(settings.database_url)
        await db.connect()

        # Create singleton instances
        client = llm_client or LLMClient.from_settings(settings)
        generation_service = GenerationService(client)
        logger.info(f"🤖 Language model: {client.model}")

        # Store in app state for dependency injection
        app.state.database = db
        app.state.generation_service = generation_service
        app.state.ingestion_service = IngestionService(generation_service)

        logger.info("✅ Application startup complete")

        yield

        # Shutdown
        logger.info("🛑 Application shutdown...")
        await db.disconnect()
        logger.info("✅ Application shutdown complete")

    # Initialize rate limiter
    limiter = Limiter(key_func=get_remote_address)

    # Create app with lifespan
    app = FastAPI(title="Note Refinery API", lifespan=lifespan)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    # CORS middleware
    allowed_origins = settings.get_cors_origins()
    logger.info("🔒 CORS Configuration:")
    logger.info(f"   Allowed origins: {allowed_origins}")
    logger.info("   💡 To add more origins, set FRONTEND_URL in .env")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add authentication middleware
    app.add_middleware(AuthMiddleware)

    # Register routers
    # IMPORTANT: search must come before entries so /entries/search, /entries/speakers
    # and /entries/tags match before /entries/{entry_id}
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(search.router, prefix="/entries", tags=["Search"])
    app.include_router(entries.router, prefix="/entries", tags=["Entries"])
    app.include_router(exports.router, prefix="/entries", tags=["Export"])
    app.include_router(generation.router, prefix="/generate", tags=["Generation"])
    app.include_router(ingest.router, prefix="/ingest", tags=["Ingestion"])

    return app
