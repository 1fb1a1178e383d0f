"""Configuration module."""

from dew.config.loader import find_config_path, get_default_config, load_config
from dew.config.models import (
    ConfigError,
    DewConfig,
    LoggingConfig,
    ServerConfig,
    SnapshotConfig,
)
from dew.config.paths import (
    get_config_path,
    get_dew_home,
    get_logs_path,
    get_snapshot_path,
)

__all__ = [
    "ConfigError",
    "DewConfig",
    "LoggingConfig",
    "ServerConfig",
    "SnapshotConfig",
    "find_config_path",
    "get_config_path",
    "get_default_config",
    "get_dew_home",
    "get_logs_path",
    "get_snapshot_path",
    "load_config",
]
