"""Configuration models using Pydantic."""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from dew.config.paths import get_snapshot_path

logger = logging.getLogger(__name__)

DEFAULT_PORT = 7890


class ServerConfig(BaseModel):
    """Configuration for HTTP server.

    TLS is enabled when both ``ssl_cert`` and ``ssl_key`` are set.
    """

    host: str = "127.0.0.1"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    ssl_cert: Path | None = None
    ssl_key: Path | None = None

    @model_validator(mode="after")
    def _validate_tls_pair(self) -> "ServerConfig":
        if (self.ssl_cert is None) != (self.ssl_key is None):
            raise ValueError("ssl_cert and ssl_key must be set together")
        return self

    @property
    def tls_enabled(self) -> bool:
        return self.ssl_cert is not None and self.ssl_key is not None


class SnapshotConfig(BaseModel):
    """Configuration for todo snapshots."""

    path: Path = Field(default_factory=get_snapshot_path)
    # Seconds between writes; fires even when nothing changed
    interval: float = Field(default=300.0, gt=0)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    log_to_file: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class ConfigError(Exception):
    """Configuration error."""

    pass


class DewConfig(BaseModel):
    """Root configuration model."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
