"""Mini README: Centralised configuration models and helpers for Tallybook.

Structure:
    * TallybookSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to locate the ledger store on disk, pick the
    storage key, and choose the host/port the web tracker binds to. Values
    come from ``TALLYBOOK_*`` environment variables or a ``.env`` file and
    are validated once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TallybookSettings(BaseSettings):
    """Runtime configuration for the Tallybook tracker."""

    model_config = SettingsConfigDict(
        env_prefix="TALLYBOOK_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling reload behaviour and log verbosity.",
    )
    data_directory: Path = Field(
        Path("data"),
        validate_default=True,
        description="Directory holding the persisted ledger store.",
    )
    store_filename: str = Field(
        "ledger.json",
        description="File name of the JSON blob store inside the data directory.",
    )
    storage_key: str = Field(
        "transactions",
        min_length=1,
        description="Key under which the serialised transaction list is stored.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web tracker to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web tracker exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name, e.g. DEBUG or WARNING.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def store_path(self) -> Path:
        """Full path of the JSON blob store file."""

        return self.data_directory / self.store_filename


@lru_cache()
def get_settings() -> TallybookSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TallybookSettings()
