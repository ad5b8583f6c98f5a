"""Cancellation trigger with an optional deadline.

A Cancellation fires either when ``cancel()`` is called or when its
deadline passes, whichever comes first. The engine can tell the two apart
through ``deadline_exceeded``.

Example:
    cancel = Cancellation(timeout=1800)  # give up after 30 minutes
    stream = engine.start(WaitConfig(..., cancel=cancel), strategy)
    ...
    cancel.cancel()  # or abort early
"""

from __future__ import annotations

import asyncio
import time
from contextlib import suppress


class Cancellation:
    __slots__ = ("_deadline", "_event")

    def __init__(self, timeout: float | None = None) -> None:
        self._event = asyncio.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def deadline_exceeded(self) -> bool:
        return (
            not self._event.is_set()
            and self._deadline is not None
            and time.monotonic() >= self._deadline
        )

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.deadline_exceeded

    def time_left(self) -> float | None:
        """Seconds until the deadline, or None if there is no deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def describe_time_left(self) -> str:
        left = self.time_left()
        return "no deadline" if left is None else f"{left:.1f}s"

    async def wait(self) -> None:
        """Block until cancelled or the deadline passes.

        Timers may fire slightly early, so this re-arms until ``cancelled``
        actually holds.
        """
        while not self.cancelled:
            left = self.time_left()
            if left is None:
                await self._event.wait()
                return
            with suppress(TimeoutError):
                await asyncio.wait_for(self._event.wait(), timeout=left)
