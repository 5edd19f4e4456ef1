"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "symptom-checker"
    symptom_checker_port: int = 8005
    environment: str = "development"

    # CORS (frontend dev server by default)
    cors_allow_origins: List[str] = ["http://localhost:5173"]

    # Analysis Settings
    analysis_delay_seconds: float = 3.0  # Simulated analysis latency
    max_results: int = 3  # Conditions kept after ranking

    # Session Settings
    max_active_sessions: int = 1000
    session_idle_timeout_seconds: float = 1800.0  # Evicted on next creation

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
