"""In-memory todo record store.

Every operation, reads included, runs inside one ``asyncio.Lock``. No
operation awaits anything else while holding it, so mutations are
linearized in lock acquisition order.
"""

from __future__ import annotations

import asyncio
from builtins import list as builtin_list
from collections.abc import Callable, Mapping

from dew.todos.errors import TodoNotFoundError
from dew.todos.types import TodoRecord, TodoStatus

CommitHook = Callable[[], object]
StatusPredicate = Callable[[TodoStatus], bool]


class TodoStore:
    """Concurrency-safe mapping of todo id to record.

    Mutating operations accept an ``on_commit`` hook that runs inside the
    lock after the mutation succeeded. The store never touches the
    generation counter on its own; callers pass ``counter.advance`` there
    so bumps stay ordered with the mutations they describe.
    """

    def __init__(self, records: Mapping[str, TodoRecord] | None = None) -> None:
        self._records: dict[str, TodoRecord] = {}
        for todo_id, record in (records or {}).items():
            if todo_id != record.id:
                raise ValueError(f"record id {record.id!r} stored under {todo_id!r}")
            self._records[todo_id] = record.copy()
        self._lock = asyncio.Lock()

    async def list(self) -> builtin_list[TodoRecord]:
        """Return all records, newest first."""
        async with self._lock:
            records = [record.copy() for record in self._records.values()]
        records.sort(key=lambda r: r.id)
        records.sort(key=lambda r: r.created, reverse=True)
        return records

    async def get(self, todo_id: str) -> TodoRecord | None:
        async with self._lock:
            record = self._records.get(todo_id)
            return record.copy() if record is not None else None

    async def count(self) -> int:
        async with self._lock:
            return len(self._records)

    async def snapshot(self) -> dict[str, TodoRecord]:
        """Copy the full mapping for persistence."""
        async with self._lock:
            return {todo_id: r.copy() for todo_id, r in self._records.items()}

    async def upsert(
        self,
        record: TodoRecord,
        *,
        on_commit: CommitHook | None = None,
    ) -> TodoRecord:
        """Insert or fully replace the record stored under ``record.id``."""
        async with self._lock:
            stored = record.copy()
            self._records[stored.id] = stored
            _commit(on_commit)
            return stored.copy()

    async def update_status(
        self,
        todo_id: str,
        status: TodoStatus,
        *,
        on_commit: CommitHook | None = None,
    ) -> TodoRecord:
        async with self._lock:
            record = _require(self._records, todo_id)
            record.status = status
            _commit(on_commit)
            return record.copy()

    async def update_title(
        self,
        todo_id: str,
        title: str,
        *,
        on_commit: CommitHook | None = None,
    ) -> TodoRecord:
        async with self._lock:
            record = _require(self._records, todo_id)
            record.title = title
            _commit(on_commit)
            return record.copy()

    async def delete_where(
        self,
        predicate: StatusPredicate,
        *,
        on_commit: CommitHook | None = None,
    ) -> int:
        """Remove every record whose status matches ``predicate``."""
        async with self._lock:
            doomed = [
                todo_id
                for todo_id, record in self._records.items()
                if predicate(record.status)
            ]
            for todo_id in doomed:
                del self._records[todo_id]
            _commit(on_commit)
            return len(doomed)


def _require(records: dict[str, TodoRecord], todo_id: str) -> TodoRecord:
    record = records.get(todo_id)
    if record is None:
        raise TodoNotFoundError(todo_id)
    return record


def _commit(hook: CommitHook | None) -> None:
    if hook is not None:
        hook()
