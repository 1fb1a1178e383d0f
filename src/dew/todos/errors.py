"""Todo errors."""


class TodoNotFoundError(LookupError):
    """A mutation targeted an id that is not in the store."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"todo {todo_id} not found")
        self.todo_id = todo_id
