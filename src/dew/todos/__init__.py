"""Todo subsystem public API.

Public API:
- TodoService: Main entry point
- TodoStore: Lock-guarded record store
- GenerationCounter: Change counter polled by clients

Types:
- TodoRecord, TodoStatus, TodoNotFoundError
"""

from dew.todos.errors import TodoNotFoundError
from dew.todos.generation import GenerationCounter
from dew.todos.service import TodoService
from dew.todos.store import TodoStore
from dew.todos.types import TodoRecord, TodoStatus

__all__ = [
    "GenerationCounter",
    "TodoNotFoundError",
    "TodoRecord",
    "TodoService",
    "TodoStatus",
    "TodoStore",
]
