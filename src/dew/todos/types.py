"""Todo record types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TodoStatus(StrEnum):
    """Allowed todo statuses.

    Values match the wire spelling used by clients and snapshots.
    """

    ACTIVE = "Active"
    COMPLETED = "Completed"


@dataclass
class TodoRecord:
    """A single todo item."""

    id: str
    title: str
    status: TodoStatus
    created: datetime

    @classmethod
    def new(cls, title: str = "") -> TodoRecord:
        """Build a fresh active record with a random id and the current time."""
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            status=TodoStatus.ACTIVE,
            created=datetime.now(UTC),
        )

    def copy(self) -> TodoRecord:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "created": self.created.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TodoRecord:
        """Decode a record, raising ``ValueError`` on malformed input."""
        if not isinstance(data, dict):
            raise ValueError(f"todo record must be an object, got {type(data).__name__}")
        missing = [key for key in ("id", "title", "status", "created") if key not in data]
        if missing:
            raise ValueError(f"todo record missing fields: {', '.join(missing)}")
        if not isinstance(data["id"], str) or not data["id"]:
            raise ValueError("todo id must be a non-empty string")
        if not isinstance(data["title"], str):
            raise ValueError("todo title must be a string")
        return cls(
            id=data["id"],
            title=data["title"],
            status=TodoStatus(data["status"]),
            created=_parse_dt(data["created"]),
        )


def _parse_dt(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp: {value!r}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
