"""
WorkloadHub API Main Application

Entry point for the FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from workloadhub.platform.config import settings
from workloadhub.platform.logging import configure_logging, get_logger
from workloadhub.api.routers import overrides, team, workload
from workloadhub.api.dependencies import (
    init_resources,
    close_resources,
    get_board_client,
    get_postgres_adapter,
)

# Configure logging on import
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting WorkloadHub API...")
    try:
        await init_resources()
        logger.info("Resources initialized successfully.")
    except Exception as e:
        logger.error("Failed to initialize resources", error=str(e))
        raise

    yield

    logger.info("Shutting down WorkloadHub API...")
    await close_resources()
    logger.info("Resources closed.")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Sprint workload and capacity dashboard",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# OBSERVABILITY
# =============================================================================

if settings.METRICS_ENABLED:
    app.mount("/metrics", make_asgi_app())


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health/live", tags=["Health"])
async def liveness() -> dict:
    """Liveness probe - is the service running?"""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
async def readiness() -> dict:
    """
    Readiness probe - is the service ready to accept traffic?
    Checks the roster/override database; reports whether the board token is set.
    """
    database_healthy = get_postgres_adapter().health_check()
    board_configured = get_board_client().is_configured

    return {
        "status": "ready" if database_healthy else "not_ready",
        "version": settings.VERSION,
        "checks": {
            "database": "healthy" if database_healthy else "unhealthy",
            "board": "configured" if board_configured else "not_configured",
        },
    }


# =============================================================================
# API ROUTERS
# =============================================================================

app.include_router(team.router, prefix="/api/v1/team", tags=["Team"])
app.include_router(overrides.router, prefix="/api/v1/overrides", tags=["Overrides"])
app.include_router(workload.router, prefix="/api/v1", tags=["Workload"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "workloadhub.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
