"""Application configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class SessionStoreBackend(str, Enum):
    memory = "memory"
    redis = "redis"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    # Session persistence
    SESSION_STORE: SessionStoreBackend = SessionStoreBackend.memory
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_KEY_PREFIX: str = "advisor"
    SESSION_TTL_SECONDS: int = 0  # 0 = keep sessions until deleted

    # Classification
    PARTIAL_MIN_ANSWERS: int = 3
    HIGH_CONFIDENCE_ALTERNATIVE_THRESHOLD: float = 50.0


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
