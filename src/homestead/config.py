"""Lightweight runtime configuration for Homestead matches."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings read from ``HOMESTEAD_*`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="HOMESTEAD_", env_file=".env", env_file_encoding="utf-8"
    )

    rng_seed: str = Field(default="homestead", description="Seed for the match random source")
    disable_end_checks: bool = Field(
        default=False,
        description="Suppress validation defeats and roster checks while debugging",
    )
    shuffle_starting_deck: bool = Field(
        default=True, description="Shuffle the draw pile after the starting cards are added"
    )
    rules_file: Path | None = Field(
        default=None, description="JSON file with rule overrides; defaults apply when unset"
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
