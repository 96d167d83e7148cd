"""Application configuration using Pydantic settings."""
from datetime import timedelta
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    environment: str = "development"
    log_level: Optional[str] = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"

    # Redis (for ARQ worker)
    redis_url: str = "redis://127.0.0.1:6379"

    # Session lifecycle
    session_live_timeout: timedelta = timedelta(minutes=5)  # Inactivity before a session expires
    session_check_interval: timedelta = timedelta(minutes=1)  # Delay between expiry scans

    # Criticality classification (OpenRouter)
    openrouter_api_key: Optional[str] = None
    openrouter_model: str = "openai/gpt-oss-120b:free"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    classifier_timeout_seconds: float = 30.0
    classifier_reasoning: bool = True

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]


settings = Settings()
