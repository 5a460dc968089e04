"""Fire-and-forget execution of persistence writes."""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundWriter:
    """Runs storage writes off the session thread.

    A failed write is logged and otherwise ignored: the in-memory session
    state stays authoritative. With ``synchronous=True`` writes run inline,
    which keeps tests deterministic.
    """

    def __init__(self, max_workers: int = 2, synchronous: bool = False):
        self.synchronous = synchronous
        self.failures = 0
        self._executor = (
            None
            if synchronous
            else ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="nfwords-writer")
        )
        self._pending: list[Future] = []

    def submit(self, description: str, func: Callable[..., Any], *args, **kwargs) -> None:
        """Schedule ``func(*args, **kwargs)``.

        Args:
            description: Short label used in log messages
            func: The write to perform
        """
        if self._executor is None:
            self._run(description, func, *args, **kwargs)
            return
        future = self._executor.submit(self._run, description, func, *args, **kwargs)
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(future)

    def flush(self, timeout: float | None = None) -> None:
        """Wait for all scheduled writes to finish."""
        for future in list(self._pending):
            future.result(timeout=timeout)
        self._pending.clear()

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "BackgroundWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def _run(self, description: str, func: Callable[..., Any], *args, **kwargs) -> None:
        try:
            func(*args, **kwargs)
        except Exception as e:
            self.failures += 1
            logger.error(f"Background write failed ({description}): {e}", exc_info=True)
