"""Snapshot errors."""

from pathlib import Path


class CorruptSnapshotError(Exception):
    """A snapshot file exists but cannot be decoded under any known version."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"corrupt snapshot {path}: {reason}")
        self.path = path
        self.reason = reason


class PersistenceError(Exception):
    """Writing a snapshot failed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to write snapshot {path}: {reason}")
        self.path = path
        self.reason = reason
