"""Configuration file loading and environment variable expansion.

This module provides:
- Environment variable expansion for config values (${VAR} syntax)
- YAML config file loading with Pydantic validation
- Config file discovery (--config, $LAUNCHDECK_CONFIG, ./launchdeck.yaml, XDG config path)

A config file is optional: when discovery finds nothing, the defaults
are used.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from launchdeck.config.schema import Config
from launchdeck.errors import LaunchdeckError, PathResolutionError
from launchdeck.paths import get_default_config_path

# Environment variable naming an explicit config file
CONFIG_ENV_VAR = "LAUNCHDECK_CONFIG"


class ConfigError(LaunchdeckError):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize ConfigError with message and optional path.

        Args:
            message: Error description
            path: Path to the config file that caused the error
        """
        self.path = path
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigValidationError(ConfigError):
    """Raised when config validation fails."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        validation_errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.validation_errors = validation_errors or []
        super().__init__(message, path)


class EnvironmentVariableError(ConfigError):
    """Raised when a referenced environment variable is not set."""

    def __init__(self, var_name: str, path: Path | None = None) -> None:
        self.var_name = var_name
        message = (
            f"Environment variable '{var_name}' is not set. "
            f"Set it or update your config to use a different value."
        )
        super().__init__(message, path)


# Pattern for environment variable references: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")


def expand_env_vars(value: Any, *, strict: bool = True) -> Any:
    """Expand environment variable references in a value.

    Supports the ${VAR_NAME} syntax in strings, recursing into lists and
    dicts.

    Args:
        value: The value to expand
        strict: If True, raise an error for undefined env vars.
                If False, leave the ${VAR} reference unchanged.

    Returns:
        The value with environment variables expanded.

    Raises:
        EnvironmentVariableError: If strict=True and an env var is not set.

    Examples:
        >>> os.environ["LAUNCHER_HOME"] = "/srv/apps"
        >>> expand_env_vars({"data_dir": "${LAUNCHER_HOME}/state"})
        {'data_dir': '/srv/apps/state'}
    """
    if isinstance(value, str):
        return _expand_string(value, strict=strict)
    if isinstance(value, dict):
        return {k: expand_env_vars(v, strict=strict) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item, strict=strict) for item in value]
    return value


def _expand_string(s: str, *, strict: bool) -> str:
    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            if strict:
                raise EnvironmentVariableError(var_name)
            return match.group(0)
        return value

    return ENV_VAR_PATTERN.sub(replace_match, s)


def discover_config_path(explicit_path: str | Path | None = None) -> Path | None:
    """Discover the config file path using priority order.

    Discovery order:
    1. explicit_path (from --config flag)
    2. $LAUNCHDECK_CONFIG environment variable
    3. ./launchdeck.yaml (current directory)
    4. XDG config path ($XDG_CONFIG_HOME/launchdeck/config.yaml)

    Args:
        explicit_path: Optional explicit path from CLI --config flag

    Returns:
        Path to the config file, or None if no file exists

    Raises:
        ConfigNotFoundError: If an explicit or $LAUNCHDECK_CONFIG path is missing
    """
    if explicit_path:
        path = Path(explicit_path).expanduser().resolve()
        if path.exists():
            return path
        msg = f"Config file not found: {path}"
        raise ConfigNotFoundError(msg, path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path).expanduser().resolve()
        if path.exists():
            return path
        msg = f"Config file from ${CONFIG_ENV_VAR} not found: {path}"
        raise ConfigNotFoundError(msg, path)

    cwd_path = Path.cwd() / "launchdeck.yaml"
    if cwd_path.exists():
        return cwd_path

    try:
        default_path = get_default_config_path()
    except PathResolutionError:
        return None
    if default_path.exists():
        return default_path

    return None


def load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML as a dictionary

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read config file: {e}"
        raise ConfigError(msg, path) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML syntax: {e}"
        raise ConfigError(msg, path) from e

    if data is None:
        # Empty file
        return {}

    if not isinstance(data, dict):
        msg = "Config file must contain a YAML mapping (dictionary), not a list or scalar"
        raise ConfigError(msg, path)

    return data


def load_config(
    path: str | Path | None = None,
    *,
    expand_env: bool = True,
) -> Config:
    """Load and validate configuration.

    This function:
    1. Discovers the config file using the priority order
    2. Parses the YAML content
    3. Expands environment variable references (${VAR})
    4. Validates against the Config schema

    Args:
        path: Optional explicit path to config file. If None, uses discovery.
        expand_env: Whether to expand ${VAR} environment variable references.

    Returns:
        Validated Config object (defaults when no file was found)

    Raises:
        ConfigNotFoundError: If an explicitly requested file is missing
        ConfigError: If the file cannot be read or parsed
        EnvironmentVariableError: If a required env var is not set
        ConfigValidationError: If the config fails schema validation
    """
    config_path = discover_config_path(path)
    if config_path is None:
        return Config()

    raw_config = load_yaml(config_path)

    if expand_env:
        try:
            raw_config = expand_env_vars(raw_config, strict=True)
        except EnvironmentVariableError as e:
            e.path = config_path
            raise

    try:
        return Config.model_validate(raw_config)
    except ValidationError as e:
        errors = e.errors()
        error_msgs: list[str] = []
        for err in errors:
            loc = ".".join(str(loc) for loc in err["loc"])
            error_msgs.append(f"  - {loc}: {err['msg']}")

        message = (
            f"Config validation failed ({len(errors)} error(s)):\n"
            + "\n".join(error_msgs)
        )
        validation_error_dicts = [dict(err) for err in errors]
        raise ConfigValidationError(
            message, path=config_path, validation_errors=validation_error_dicts
        ) from e
