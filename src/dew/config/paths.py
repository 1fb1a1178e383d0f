"""Centralized path management for Dew.

All state (config, snapshot, logs) is stored under a single base directory.
The base directory can be overridden with the DEW_HOME environment variable.

Default locations:
- Linux/macOS: ~/.dew
- Windows: %USERPROFILE%\\.dew
"""

import os
from pathlib import Path

ENV_VAR = "DEW_HOME"


def get_dew_home() -> Path:
    """Get the base directory for all Dew data.

    Resolution order:
    1. DEW_HOME environment variable (if set)
    2. Platform default (~/.dew)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".dew"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_dew_home() / "config.toml"


def get_snapshot_path() -> Path:
    """Get the default todo snapshot path."""
    return get_dew_home() / "todos.json"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_dew_home() / "logs"
