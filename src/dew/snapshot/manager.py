"""Versioned JSON snapshots of the todo store.

The file is a single envelope::

    {"version": 1, "payload": {"<id>": {"id", "title", "status", "created"}}}

Writes go through tempfile + fsync + os.replace() so a crash mid-write
never leaves a truncated snapshot behind. A missing file loads as an
empty store; anything else that fails to decode is fatal.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dew.snapshot.errors import CorruptSnapshotError, PersistenceError
from dew.todos.store import TodoStore
from dew.todos.types import TodoRecord

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SnapshotManager:
    """Load/save a ``TodoStore`` to a single JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> TodoStore:
        """Load the store, reading the file in a worker thread."""
        records = await asyncio.to_thread(_load_records, self._path)
        return TodoStore(records)

    def load_sync(self) -> TodoStore:
        """Synchronous variant of ``load``."""
        return TodoStore(_load_records(self._path))

    async def store(self, store: TodoStore) -> None:
        """Persist the store.

        Copies records under the store lock on the event loop, then hands the
        serialized payload to a worker thread for I/O.
        """
        records = await store.snapshot()
        await asyncio.to_thread(self.store_sync, records)

    def store_sync(self, records: Mapping[str, TodoRecord]) -> None:
        """Write ``records`` atomically, replacing any previous snapshot.

        Raises:
            PersistenceError: On serialization or filesystem failure.
        """
        try:
            data = encode_snapshot(records)
            _write_json_atomic(self._path, data)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(self._path, str(e)) from e
        logger.debug(
            "snapshot_written",
            extra={"file.path": str(self._path), "snapshot.records": len(records)},
        )


def encode_snapshot(records: Mapping[str, TodoRecord]) -> dict[str, Any]:
    """Build the current-version envelope for ``records``."""
    return {
        "version": SNAPSHOT_VERSION,
        "payload": {todo_id: record.to_dict() for todo_id, record in records.items()},
    }


def decode_snapshot(data: Any, path: Path) -> dict[str, TodoRecord]:
    """Decode an envelope into records.

    Raises:
        CorruptSnapshotError: If the envelope is malformed or its version
            is unknown.
    """
    if not isinstance(data, dict):
        raise CorruptSnapshotError(path, "snapshot is not an object")
    if "version" not in data or "payload" not in data:
        raise CorruptSnapshotError(path, "missing version or payload")

    version = data["version"]
    # bool is an int subclass; reject it explicitly
    if isinstance(version, bool) or version != SNAPSHOT_VERSION:
        raise CorruptSnapshotError(path, f"unknown snapshot version {version!r}")

    return _decode_v1_payload(data["payload"], path)


def _decode_v1_payload(payload: Any, path: Path) -> dict[str, TodoRecord]:
    if not isinstance(payload, dict):
        raise CorruptSnapshotError(path, "payload is not an object")

    records: dict[str, TodoRecord] = {}
    for todo_id, raw in payload.items():
        try:
            record = TodoRecord.from_dict(raw)
        except ValueError as e:
            raise CorruptSnapshotError(path, f"bad record {todo_id!r}: {e}") from e
        if record.id != todo_id:
            raise CorruptSnapshotError(
                path, f"record {record.id!r} stored under key {todo_id!r}"
            )
        records[todo_id] = record
    return records


def _load_records(path: Path) -> dict[str, TodoRecord]:
    """Read and decode the snapshot file (runs in worker thread)."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("snapshot_missing", extra={"file.path": str(path)})
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise CorruptSnapshotError(path, str(e)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptSnapshotError(path, f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise CorruptSnapshotError(path, "JSON nested too deeply") from e

    records = decode_snapshot(data, path)
    logger.info(
        "snapshot_loaded",
        extra={"file.path": str(path), "snapshot.records": len(records)},
    )
    return records


def _write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """Write JSON atomically via tempfile + fsync + os.replace()."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2, sort_keys=True))
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        Path(tmp).replace(path)
    except BaseException:
        try:
            Path(tmp).unlink()
        except OSError:
            pass
        raise
