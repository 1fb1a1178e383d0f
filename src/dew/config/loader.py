"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dew.config.models import ConfigError, DewConfig
from dew.config.paths import get_config_path

# (section, key, env var); environment wins over the config file
ENV_OVERRIDES = [
    ("snapshot", "path", "DEW_SNAPSHOT_PATH"),
    ("snapshot", "interval", "DEW_SNAPSHOT_INTERVAL"),
    ("server", "ssl_cert", "SSL_CERT"),
    ("server", "ssl_key", "SSL_KEY"),
    ("logging", "level", "DEW_LOG_LEVEL"),
]


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.dew/config.toml (or DEW_HOME)
        Path("/etc/dew/config.toml"),  # System-wide
    ]


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Overlay environment variables onto raw config values."""
    for section_key, key, env_var in ENV_OVERRIDES:
        value = os.environ.get(env_var)
        if not value:
            continue
        section = config.setdefault(section_key, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{section_key}] must be a table")
        section[key] = value
    return config


def find_config_path(path: Path | None = None) -> Path | None:
    """Resolve the config file to use, or None if no file exists.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    for default_path in _get_default_config_paths():
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded
    return None


def load_config(path: Path | None = None) -> DewConfig:
    """Load configuration from TOML file.

    Unlike an explicit path, a missing default config is not an error: the
    service runs with defaults plus environment overrides.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Validated DewConfig instance.

    Raises:
        FileNotFoundError: If an explicit config file is missing.
        ConfigError: If the config file is invalid.
    """
    config_path = find_config_path(path)

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    raw_config = _apply_env_overrides(raw_config)

    try:
        return DewConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def get_default_config() -> DewConfig:
    """Get a default configuration for development/testing."""
    return DewConfig()
