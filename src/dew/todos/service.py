"""Todo service facade.

``TodoService`` is the single handle constructed at startup and passed to
the HTTP layer. It pairs the record store with the generation counter.
"""

from __future__ import annotations

import logging
from builtins import list as builtin_list

from dew.todos.generation import GenerationCounter
from dew.todos.store import TodoStore
from dew.todos.types import TodoRecord, TodoStatus

logger = logging.getLogger(__name__)


class TodoService:
    """Async facade for todo operations."""

    def __init__(
        self,
        store: TodoStore | None = None,
        generation: GenerationCounter | None = None,
    ) -> None:
        self._store = store if store is not None else TodoStore()
        self._generation = generation if generation is not None else GenerationCounter()

    @property
    def store(self) -> TodoStore:
        return self._store

    @property
    def generation(self) -> GenerationCounter:
        return self._generation

    async def list_todos(self) -> builtin_list[TodoRecord]:
        return await self._store.list()

    async def create_or_replace_todo(self, record: TodoRecord) -> TodoRecord:
        todo = await self._store.upsert(record, on_commit=self._generation.advance)
        logger.info(
            "todo_created",
            extra={"todo.id": todo.id, "todo.title": todo.title},
        )
        return todo

    async def set_status(self, todo_id: str, status: TodoStatus) -> TodoRecord:
        """Change the status of an existing todo.

        Raises:
            TodoNotFoundError: If no todo has ``todo_id``. The generation is
                left unchanged.
        """
        todo = await self._store.update_status(
            todo_id, status, on_commit=self._generation.advance
        )
        logger.info(
            "todo_status_updated",
            extra={"todo.id": todo.id, "todo.status": todo.status.value},
        )
        return todo

    async def set_title(self, todo_id: str, title: str) -> TodoRecord:
        """Change the title of an existing todo.

        Raises:
            TodoNotFoundError: If no todo has ``todo_id``.
        """
        todo = await self._store.update_title(
            todo_id, title, on_commit=self._generation.advance
        )
        logger.info(
            "todo_title_updated",
            extra={"todo.id": todo.id, "todo.title": todo.title},
        )
        return todo

    async def delete_completed(self) -> int:
        """Remove every completed todo. Always bumps the generation."""
        removed = await self._store.delete_where(
            lambda status: status == TodoStatus.COMPLETED,
            on_commit=self._generation.advance,
        )
        logger.info("todos_completed_deleted", extra={"todo.removed": removed})
        return removed

    def get_generation(self) -> int:
        return self._generation.current()
