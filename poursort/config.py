"""Configuration settings using Pydantic Settings.

Usage:
    from poursort.config import GeneratorSettings, get_settings

    # Load from environment variables (POURSORT_*)
    settings = get_settings()

    # Or override with explicit values
    settings = GeneratorSettings(capacity=5)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):
    """Knobs for level generation.

    Attributes:
        capacity: Units per bottle, shared by every bottle in a level.
        color_count: How many colors the seed cycles through.
        attempt_factor: Shuffle draws allowed per requested step.
        steps_per_level: Extra shuffle steps added per level index.
        log_level: Logging level used by the CLI.

    Environment Variables:
        POURSORT_CAPACITY
        POURSORT_COLOR_COUNT
        POURSORT_ATTEMPT_FACTOR
        POURSORT_STEPS_PER_LEVEL
        POURSORT_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="POURSORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    capacity: int = Field(default=4, gt=0)
    color_count: int = Field(default=6, ge=1, le=6)
    attempt_factor: int = Field(default=10, ge=1)
    steps_per_level: int = Field(default=2, ge=0)
    log_level: str = "WARNING"


@lru_cache(maxsize=1)
def get_settings() -> GeneratorSettings:
    """Settings loaded once from the environment."""
    return GeneratorSettings()
