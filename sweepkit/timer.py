"""A simple stopwatch timer with nanosecond resolution."""

from __future__ import annotations

import time


class Timer:
    """Stopwatch that starts on creation. Not thread-safe."""

    def __init__(self) -> None:
        self._time_ns = 0  # start time while running, elapsed time while stopped
        self._running = False
        self.start()

    @staticmethod
    def now_ns() -> int:
        return time.perf_counter_ns()

    def is_running(self) -> bool:
        return self._running

    def is_stopped(self) -> bool:
        return not self._running

    def start(self) -> None:
        """Start (or restart) the timer from now."""
        self._running = True
        self._time_ns = self.now_ns()

    def stop(self) -> None:
        """Stop the timer; further calls have no effect."""
        if not self._running:
            return
        self._running = False
        self._time_ns = self.now_ns() - self._time_ns

    def resume(self) -> None:
        """Continue counting from the last stop; no effect while running."""
        if self._running:
            return
        prev_elapsed = self._time_ns
        self.start()
        self._time_ns -= prev_elapsed

    def elapsed(self) -> int:
        """Elapsed nanoseconds; does not stop the timer."""
        if not self._running:
            return self._time_ns
        return self.now_ns() - self._time_ns

    def reset(self) -> None:
        self._time_ns = 0
        self._running = False