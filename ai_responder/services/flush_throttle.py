from __future__ import annotations

from collections.abc import Callable
import time


class FlushThrottle:
    """Decides per fragment whether accumulated text should be pushed to the chat backend.

    The first flush of a response is always due; after that a flush is due once strictly more
    than ``interval_seconds`` have passed since the previous one.
    """

    def __init__(self, interval_seconds: float = 1.0, clock: Callable[[], float] = time.monotonic) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._interval_seconds = interval_seconds
        self._clock = clock

    def now(self) -> float:
        return self._clock()

    def is_due(self, last_flush_at: float | None) -> bool:
        if last_flush_at is None:
            return True
        return self._clock() - last_flush_at > self._interval_seconds
