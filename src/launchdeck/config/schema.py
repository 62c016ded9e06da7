"""Pydantic schema models for configuration.

This module defines the configuration models:
- Config: Top-level configuration container
- StorageConfig: Where the launcher database lives
- LoggingConfig: Log verbosity and format
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from launchdeck.paths import DB_FILENAME


class StorageConfig(BaseModel):
    """State storage configuration.

    Attributes:
        data_dir: Directory holding the database (default: XDG data dir)
                  Uses $XDG_DATA_HOME/launchdeck (~/.local/share/launchdeck)
        filename: Database file name (default: launcher.db)
    """

    model_config = ConfigDict(extra="forbid")

    data_dir: str | None = None
    filename: Annotated[str, Field(min_length=1, max_length=255)] = DB_FILENAME

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Reject file names that would escape the data directory."""
        if Path(v).name != v or v in {".", ".."}:
            msg = "filename must be a plain file name without directories"
            raise ValueError(msg)
        return v


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        verbose: Enable DEBUG level output
        json_output: Emit JSON lines instead of console-formatted logs
    """

    model_config = ConfigDict(extra="forbid")

    verbose: bool = False
    json_output: bool = False


class Config(BaseModel):
    """Top-level configuration loaded from YAML.

    Attributes:
        version: Schema version (must be 1)
        storage: Database location settings
        logging: Log settings
    """

    model_config = ConfigDict(extra="forbid")

    version: Literal[1] = 1
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
