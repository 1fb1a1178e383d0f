"""Todo routes (v1).

Thin mapping of HTTP onto ``TodoService``. Clients poll ``/generation``
and re-fetch ``/todos`` whenever the value changes.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from dew.todos import TodoNotFoundError, TodoRecord, TodoService, TodoStatus

router = APIRouter()


class TodoModel(BaseModel):
    """Wire shape of a todo."""

    id: str = Field(min_length=1)
    title: str
    status: TodoStatus
    created: datetime

    @classmethod
    def from_record(cls, record: TodoRecord) -> "TodoModel":
        return cls(
            id=record.id,
            title=record.title,
            status=record.status,
            created=record.created,
        )

    def to_record(self) -> TodoRecord:
        return TodoRecord.from_dict(
            {
                "id": self.id,
                "title": self.title,
                "status": self.status.value,
                "created": self.created.isoformat(),
            }
        )


def get_service(request: Request) -> TodoService:
    return request.app.state.todos


ServiceDep = Annotated[TodoService, Depends(get_service)]


def _not_found(e: TodoNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/todos")
async def list_todos(service: ServiceDep) -> list[TodoModel]:
    """List all todos, newest first."""
    return [TodoModel.from_record(r) for r in await service.list_todos()]


@router.post("/todos")
async def add_todo(todo: TodoModel, service: ServiceDep) -> TodoModel:
    """Create a todo, or replace the one with the same id."""
    record = await service.create_or_replace_todo(todo.to_record())
    return TodoModel.from_record(record)


@router.delete("/todos/completed")
async def delete_completed_todos(service: ServiceDep) -> None:
    await service.delete_completed()


@router.post("/todos/{todo_id}/status")
async def set_todo_status(
    todo_id: str,
    new_status: Annotated[TodoStatus, Body()],
    service: ServiceDep,
) -> TodoModel:
    try:
        record = await service.set_status(todo_id, new_status)
    except TodoNotFoundError as e:
        raise _not_found(e) from e
    return TodoModel.from_record(record)


@router.post("/todos/{todo_id}/title")
async def set_todo_title(
    todo_id: str,
    title: Annotated[str, Body()],
    service: ServiceDep,
) -> TodoModel:
    try:
        record = await service.set_title(todo_id, title)
    except TodoNotFoundError as e:
        raise _not_found(e) from e
    return TodoModel.from_record(record)


@router.get("/generation")
async def get_generation(service: ServiceDep) -> int:
    """Current change generation."""
    return service.get_generation()
