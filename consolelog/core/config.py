"""Library configuration settings."""

from functools import lru_cache
import logging
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ColorSettings(BaseSettings):
    """Color switch read by every console handler.

    Kept apart from Settings so building a handler never validates
    unrelated LOG_* variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    no_color: str = Field(
        default="", description="Any non-empty value disables colorized output (NO_COLOR convention)"
    )

    @property
    def color_disabled(self) -> bool:
        """Whether the NO_COLOR override is in effect."""
        return self.no_color != ""


class Settings(ColorSettings):
    """Console logging configuration settings.

    All settings can be overridden via environment variables.
    """

    # Console handler installed by configure_logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="The log level to use"
    )
    log_remove_time: bool = Field(default=False, description="Omit the timestamp field")
    log_remove_level: bool = Field(default=False, description="Omit the level field")
    log_remove_source: bool = Field(default=False, description="Omit the source location field")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept lower-case names, WARN, and numeric levels."""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, int):
            return logging.getLevelName(value)
        if isinstance(value, str):
            value = value.strip().upper()
            return "WARNING" if value == "WARN" else value
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


__all__ = ["ColorSettings", "Settings", "get_settings"]
