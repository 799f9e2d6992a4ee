"""Lightweight configuration for the conquest engine."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through ``CONQUEST_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONQUEST_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    data_dir: Path = Field(default=Path("games"), description="Where JSON game snapshots live")
    maps_dir: Path | None = Field(
        default=None, description="Extra folder of map JSON files loaded after the bundled maps"
    )
    database_url: str = Field(default="sqlite:///conquest.db", description="SQLAlchemy URL")
    database_echo: bool = Field(default=False, description="Echo SQL statements")
    cpu_think_delay_seconds: float = Field(
        default=1.0,
        description="Pause before each CPU decision so observers can follow the game",
        ge=0.0,
    )
    cpu_max_attacks: int = Field(
        default=10, description="Upper bound on attacks a CPU makes in one turn", gt=0
    )
    default_map_id: str = Field(default="three-realms", description="Map used when none is given")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
