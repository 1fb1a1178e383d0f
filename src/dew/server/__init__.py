"""HTTP server for Dew."""

from dew.server.app import DewServer, create_app
from dew.server.runner import ServerRunner

__all__ = [
    "DewServer",
    "ServerRunner",
    "create_app",
]
