from collections.abc import Iterator
from contextlib import contextmanager

from grounded_qa.exceptions import RequestInFlightError


class InFlightGuard:
    """
    Allow at most one outstanding request per key.

    The browser disables its submit button while waiting, but any other
    caller of /api/ask gets the same rule enforced here.
    """

    def __init__(self) -> None:
        self._active: set[str] = set()

    def is_busy(self, key: str) -> bool:
        return key in self._active

    @contextmanager
    def claim(self, key: str) -> Iterator[None]:
        """Hold the key for the duration of the block. Released on any exit."""
        # No await between check and add, so this is atomic on the event loop
        if key in self._active:
            raise RequestInFlightError(f"A request is already in progress for {key}")
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)


in_flight_guard = InFlightGuard()
