"""Configuration module for launchdeck.

This module provides configuration loading, validation, and schema
definitions.

Usage:
    from launchdeck.config import load_config, Config

    config = load_config()  # Auto-discovers config file, defaults if none
    config = load_config("/path/to/config.yaml")  # Explicit path
"""

from launchdeck.config.loader import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    EnvironmentVariableError,
    discover_config_path,
    load_config,
)
from launchdeck.config.schema import Config, LoggingConfig, StorageConfig

__all__ = [
    "Config",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "LoggingConfig",
    "StorageConfig",
    "discover_config_path",
    "load_config",
]
