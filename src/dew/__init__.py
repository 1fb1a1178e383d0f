"""Dew: shared todo list server with generation polling and snapshots."""

__version__ = "0.1.0"
