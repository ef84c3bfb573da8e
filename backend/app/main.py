"""Main FastAPI application for the Valorant abuse detector."""

from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from app.core import get_global_settings, db_manager
from app.core.logging import setup_logging
from app.features.players import players_router
from app.features.abuse_detection import abuse_detection_router


settings = get_global_settings()
setup_logging(settings.log_level, json_logs=not settings.debug)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration() -> None:
    """Log HenrikDev API key configuration status."""
    if not settings.henrik_api_key:
        logger.warning(
            "HENRIK_API_KEY not configured, requests will use the anonymous quota",
            hint="Request a key at https://docs.henrikdev.xyz",
        )
    else:
        logger.info("HenrikDev API key configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "Starting up Valorant abuse detector",
        environment=settings.environment,
        default_region=settings.default_region,
    )
    _validate_api_key_configuration()
    yield
    logger.info("Shutting down Valorant abuse detector")
    await db_manager.close()


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "players",
        "description": "Riot ID lookup and cache status.",
    },
    {
        "name": "abuse-detection",
        "description": "Opponent interaction analysis over a player's match history.",
    },
    {
        "name": "health",
        "description": "Health check and liveness endpoints.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Valorant Abuse Detector",
    description="""
    Flags opponents a Valorant player keeps losing against.

    ## Features

    * **Account lookup**: Resolve a Riot ID to a PUUID, cached in PostgreSQL
    * **Abuse detection**: Aggregate opponent encounters over recent matches
      and flag suspected deliberate losses
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(players_router, prefix="/api")
app.include_router(abuse_detection_router, prefix="/api")


@app.get("/api/ping", tags=["health"])
async def ping() -> Dict[str, str]:
    """Liveness check."""
    return {"message": "pong"}


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns the application status, version and debug flag. It does not
    touch the database; use /api/dbstatus for that.
    """
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": "0.1.0",
        "debug": settings.debug,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
