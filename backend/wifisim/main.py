"""Main FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import logging
import os

from wifisim.core.config import settings, ensure_directories
from wifisim.core.logging_config import configure_logging
from wifisim.api.v1 import simulation as simulation_routes
from wifisim.api.v1 import performance as performance_routes
from wifisim.api.v1 import access_points as access_point_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    # Startup
    configure_logging()
    ensure_directories()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    yield
    # Shutdown
    logger.info("Shutting down application")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Simulate indoor WiFi coverage and per-client throughput from a floor plan survey",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files for serving heatmaps
if os.path.exists(settings.STATIC_PATH):
    app.mount("/static", StaticFiles(directory=settings.STATIC_PATH), name="static")

# Include API routers
app.include_router(
    simulation_routes.router,
    prefix="/api/v1/simulation",
    tags=["simulation"]
)
app.include_router(
    performance_routes.router,
    prefix="/api/v1/performance",
    tags=["performance"]
)
app.include_router(
    access_point_routes.router,
    prefix="/api/v1/access-points",
    tags=["access-points"]
)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
