"""Generation counter used by clients to detect changes."""

import threading


class GenerationCounter:
    """Monotonic counter bumped once per successful mutation.

    Clients poll ``current()`` and re-fetch the full todo list whenever the
    value differs from the one they last saw. The counter starts at zero
    for every process and is never persisted.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("generation cannot be negative")
        self._value = start
        self._lock = threading.Lock()

    def current(self) -> int:
        return self._value

    def advance(self) -> int:
        """Increment the counter and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    def __repr__(self) -> str:
        return f"GenerationCounter({self._value})"
