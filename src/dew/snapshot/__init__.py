"""Snapshot persistence for the todo store."""

from dew.snapshot.errors import CorruptSnapshotError, PersistenceError
from dew.snapshot.manager import (
    SNAPSHOT_VERSION,
    SnapshotManager,
    decode_snapshot,
    encode_snapshot,
)
from dew.snapshot.writer import SnapshotWriter

__all__ = [
    "SNAPSHOT_VERSION",
    "CorruptSnapshotError",
    "PersistenceError",
    "SnapshotManager",
    "SnapshotWriter",
    "decode_snapshot",
    "encode_snapshot",
]
