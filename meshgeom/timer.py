"""A stopwatch measuring wall-clock time in milliseconds."""

from __future__ import annotations

import logging
import time

logger = logging.getLogger(__name__)


class Timer:
    """Accumulating stopwatch; also usable as a context manager."""

    def __init__(self) -> None:
        self._start_time = 0.0
        self._elapsed = 0.0
        self._running = False

    def start(self) -> None:
        """Reset the accumulated time and start measuring."""
        self._elapsed = 0.0
        self.cont()

    def cont(self) -> None:
        """Resume measuring, adding to the time accumulated so far."""
        self._start_time = time.perf_counter()
        self._running = True

    def stop(self) -> "Timer":
        """Stop measuring and add the span since the last start."""
        self._elapsed += time.perf_counter() - self._start_time
        self._running = False
        return self

    def elapsed(self) -> float:
        """Accumulated time in milliseconds; the timer should be stopped."""
        if self._running:
            logger.warning("Timer: stop timer before calling elapsed()")
        return 1000.0 * self._elapsed

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()

    def __str__(self) -> str:
        return f"{self.elapsed():g} ms"