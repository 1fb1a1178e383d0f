"""CLI command modules."""

from dew.cli.commands import config, serve, snapshot

__all__ = [
    "config",
    "serve",
    "snapshot",
]
