"""schemaworks configuration management."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMAWORKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"

    # Log the discarded errors of losing anyOf/oneOf branches at DEBUG
    log_probe_failures: bool = False

    @property
    def log_level_number(self) -> int:
        """Resolve the configured level name to a logging constant."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    settings = settings or get_settings()
    logger = logging.getLogger("schemaworks")
    logger.setLevel(settings.log_level_number)
    return logger
