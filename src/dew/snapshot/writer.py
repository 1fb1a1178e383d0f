"""Snapshot writer: periodically persists the todo store.

The writer owns the interval loop. Encoding and file access are delegated
to SnapshotManager.
"""

import asyncio
import logging

from dew.snapshot.errors import PersistenceError
from dew.snapshot.manager import SnapshotManager
from dew.todos.store import TodoStore

logger = logging.getLogger(__name__)

# Heartbeat every N ticks (~1 hour at the default 5 minute interval)
HEARTBEAT_INTERVAL = 12


class SnapshotWriter:
    """Writes the store to disk on a fixed interval.

    The loop fires unconditionally, whether or not anything changed, and a
    failed write never stops it: the in-memory store stays authoritative.
    Writes are serialized by a lock, and ``stop()`` wakes the loop rather than
    cancelling it, so an in-flight write always lands before the final drain.
    ``stop()`` then writes one last snapshot so a clean shutdown loses nothing.

    Example:
        writer = SnapshotWriter(store, SnapshotManager(path), interval=300)
        await writer.start()
        ...
        await writer.stop()
    """

    def __init__(
        self,
        store: TodoStore,
        manager: SnapshotManager,
        interval: float = 300.0,
    ):
        if interval <= 0:
            raise ValueError("snapshot interval must be positive")
        self._store = store
        self._manager = manager
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None
        self._wake = asyncio.Event()
        self._write_lock = asyncio.Lock()
        self._tick_count = 0
        self._write_count = 0
        self._failure_count = 0
        self._last_write_failed = False

    @property
    def manager(self) -> SnapshotManager:
        return self._manager

    @property
    def running(self) -> bool:
        return self._running

    @property
    def write_count(self) -> int:
        return self._write_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def last_write_failed(self) -> bool:
        return self._last_write_failed

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._wake = asyncio.Event()
        logger.info(
            "snapshot_writer_started",
            extra={
                "file.path": str(self._manager.path),
                "snapshot.interval": self._interval,
            },
        )
        self._task = asyncio.create_task(self._write_loop())

    async def stop(self, *, drain: bool = True) -> None:
        if not self._running:
            return
        self._running = False
        self._wake.set()
        if self._task:
            # Let a write that is already running finish
            await self._task
            self._task = None
        if drain:
            await self.flush()
        logger.info("snapshot_writer_stopped", extra={"file.path": str(self._manager.path)})

    async def flush(self) -> bool:
        """Write a snapshot now. Returns False if the write failed."""
        async with self._write_lock:
            return await self._write()

    async def _write(self) -> bool:
        try:
            await self._manager.store(self._store)
        except PersistenceError as e:
            self._failure_count += 1
            self._last_write_failed = True
            logger.error(
                "snapshot_write_failed",
                extra={"file.path": str(e.path), "error.message": e.reason},
                exc_info=True,
            )
            return False
        self._write_count += 1
        self._last_write_failed = False
        return True

    async def _write_loop(self) -> None:
        while self._running:
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self._interval)
            except TimeoutError:
                pass
            if not self._running:
                break
            await self.flush()
            self._tick_count += 1
            if self._tick_count % HEARTBEAT_INTERVAL == 0:
                logger.info(
                    "snapshot_writer_heartbeat",
                    extra={
                        "snapshot.writes": self._write_count,
                        "snapshot.failures": self._failure_count,
                    },
                )
