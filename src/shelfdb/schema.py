"""
Schema definitions for shelfdb.

This module defines the Pydantic models that are not row data:
- StoreConfig: How a store is built (location, decode strictness, logging)
- TableInfo: Read-only summary of one table, for inspection and the CLI

Configuration is plain YAML:

    path: ./data/store.json
    strict: true
    log_level: INFO
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shelfdb.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Config Models
# =============================================================================


class StoreConfig(BaseModel):
    """
    Settings for building a ShelfDB.

    Attributes:
        path: Default location for save() and load(); loaded on construction
        strict: Decode payloads in pydantic strict mode
        log_level: Level applied to the "shelfdb" logger by the CLI
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Path | None = Field(
        default=None,
        description="Default blob location for save and load",
    )
    strict: bool = Field(
        default=True,
        description="Reject payloads that only decode through type coercion",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for the shelfdb logger",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            msg = f"Invalid log level: {v}. Must be one of {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return level


class TableInfo(BaseModel):
    """
    Summary of a stored table.

    Attributes:
        name: Table name
        type_tag: Diagnostic tag of the stored list type ("" if never written)
        size_bytes: Payload size
        row_count: Number of rows, or None if the payload is not a JSON list
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_tag: str = ""
    size_bytes: int = 0
    row_count: int | None = None


# =============================================================================
# Loading Functions
# =============================================================================


def _parse_config(content: str, source: str = "") -> StoreConfig:
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(path=source, underlying_error=str(e)) from e

    if data is None:
        return StoreConfig()
    if not isinstance(data, dict):
        raise ConfigError(path=source, underlying_error="top level must be a mapping")

    try:
        return StoreConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(path=source, underlying_error=str(e)) from e


def load_config(path: Path | str) -> StoreConfig:
    """
    Load a store configuration from a YAML file.

    A relative `path:` entry is resolved against the config file's directory.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the YAML is malformed or doesn't match the schema
    """
    path = Path(path)
    with path.open() as f:
        config = _parse_config(f.read(), source=str(path))

    if config.path is not None and not config.path.is_absolute():
        config = config.model_copy(update={"path": path.parent / config.path})
    return config


def load_config_from_string(content: str) -> StoreConfig:
    """Load a store configuration from a YAML string."""
    return _parse_config(content)
