"""Configuration management for DCC Character Sheet."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CHARACTERS_DIRNAME = "character-sheets"
MAPS_DIRNAME = "maps"
PARTIES_DIRNAME = "parties"
WORLD_NOTES_DIRNAME = "world-notes"


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DCC_",
    )

    # Paths
    data_dir: Path = Field(default_factory=lambda: Path.home() / "dcc-character-sheet")

    # Output
    indent: int = Field(default=2, description="JSON indent for record files")
    history_rule_width: int = Field(default=80, description="Width of the history report rule")
    log_level: str = Field(default="WARNING", description="Log level when not running verbose")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
