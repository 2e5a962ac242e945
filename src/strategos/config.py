"""Lightweight configuration for the Strategos tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through ``STRATEGOS_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="STRATEGOS_", env_file=".env", env_file_encoding="utf-8"
    )

    data_dir: Path = Field(default=Path("game-data"), description="Where records are stored")
    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    game_id: str = Field(
        default="default",
        min_length=1,
        description="Identifier mixed into every random seed",
    )
    tech_tree_file: Path | None = Field(
        default=None,
        description="JSON technology tree replacing the reference tree",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )

    @property
    def turn_log_path(self) -> Path:
        return self.data_dir / "turns.jsonl"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
