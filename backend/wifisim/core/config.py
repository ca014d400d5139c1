"""Application configuration settings."""

from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "WiFi Coverage Simulator"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Redis (Celery broker and result backend)
    REDIS_URL: str = "redis://localhost:6379/0"

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # File storage
    STATIC_PATH: str = "./static"
    HEATMAP_PATH: str = "./static/heatmaps"

    # RF simulation
    DEFAULT_GRID_RESOLUTION: int = 6  # floor-plan pixels per grid cell
    DEFAULT_PIXELS_PER_METER: float = 50.0  # used when no floor plan is set

    # Background recomputation
    RECOMPUTE_DEBOUNCE_SECONDS: float = 0.4
    SIMULATION_WORKERS: int = 2

    # Heat-map rendering / coverage report
    HEATMAP_MIN_DBM: float = -90.0  # below this -> transparent
    HEATMAP_MAX_DBM: float = -50.0  # above this -> full green
    COVERAGE_THRESHOLD_DBM: float = -70.0

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()


# Ensure directories exist
def ensure_directories():
    """Create necessary directories if they don't exist."""
    os.makedirs(settings.HEATMAP_PATH, exist_ok=True)
