"""
Configuration for calcpad.

Values are read from ``CALCPAD_*`` environment variables (or a ``.env`` file)
and fall back to the defaults below.
"""
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CalculatorSettings(BaseSettings):
    """Engine and logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="CALCPAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fractional digits kept when normalizing results (absorbs 0.1 + 0.2 noise)
    round_digits: int = Field(default=12, ge=0, le=15)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v


# Global settings instance
settings = CalculatorSettings()
