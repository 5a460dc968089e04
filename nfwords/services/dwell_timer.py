"""Dwell timer for measuring how long a card stays on screen."""

import time

from nfwords.interfaces import Clock


class DwellTimer:
    """Measures elapsed time with an injected clock.

    There is no ticking thread: callers read ``elapsed`` whenever they need
    to display it. ``stop`` and ``reset`` may be called any number of times.
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._started_at: float | None = None
        self._accumulated = 0.0

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Seconds measured so far, including the running interval."""
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + max(self._clock() - self._started_at, 0.0)

    def start(self) -> None:
        """Start a fresh measurement."""
        self._accumulated = 0.0
        self._started_at = self._clock()

    def stop(self) -> float:
        """Stop measuring and return the elapsed seconds."""
        if self._started_at is not None:
            self._accumulated += max(self._clock() - self._started_at, 0.0)
            self._started_at = None
        return self._accumulated

    def lap(self) -> float:
        """Return the elapsed seconds and immediately start a new measurement."""
        elapsed = self.stop()
        self.start()
        return elapsed

    def reset(self) -> None:
        self._started_at = None
        self._accumulated = 0.0
