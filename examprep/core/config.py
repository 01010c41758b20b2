"""Application settings and configuration."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Exam Practice API")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Question catalog (fixed external input, loaded once at startup)
    QUESTIONS_PATH: str = Field(default="data/questions.json")

    # Performance store backend
    PERFORMANCE_STORE: Literal["memory", "sql"] = Field(default="memory")

    # Database (async driver URL, only used by the sql store)
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./data/exam.db")
    DATABASE_ECHO: bool = Field(default=False)

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case the level and reject names logging does not know."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level

    def __init__(self, **kwargs):
        """Validate settings on initialization."""
        super().__init__(**kwargs)
        # Fail fast in production if the store cannot work
        if self.ENV == "prod" and self.PERFORMANCE_STORE == "memory":
            raise ValueError("PERFORMANCE_STORE must be 'sql' in production")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
