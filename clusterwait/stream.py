"""Bounded event stream between a poll run and its consumer.

One producer (the poll task) and one consumer. ``send`` waits for free
capacity so a slow consumer throttles polling; ``close`` never waits, so a
run can always finish.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator

from .constants import STREAM_CAPACITY
from .types import StatusEvent


class StreamClosedError(RuntimeError):
    """Raised when sending on a closed stream."""


class EventStream:
    def __init__(self, capacity: int = STREAM_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._buffer: deque[StatusEvent] = deque()
        self._cond = asyncio.Condition()
        self._closed = False
        self._waker: asyncio.Task[None] | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._buffer)

    async def send(self, event: StatusEvent) -> None:
        async with self._cond:
            await self._cond.wait_for(
                lambda: self._closed or len(self._buffer) < self._capacity
            )
            if self._closed:
                raise StreamClosedError("send on closed stream")
            self._buffer.append(event)
            self._cond.notify_all()

    def send_final(self, event: StatusEvent) -> None:
        """Append ``event`` ignoring capacity and close.

        Used only when the producer is being torn down and can no longer
        await free space.
        """
        if self._closed:
            raise StreamClosedError("send on closed stream")
        self._buffer.append(event)
        self._mark_closed()

    async def close(self) -> None:
        async with self._cond:
            if self._closed:
                raise StreamClosedError("stream already closed")
            self._closed = True
            self._cond.notify_all()

    def _mark_closed(self) -> None:
        self._closed = True
        # Consumers blocked in wait_for re-check on their next wakeup.
        self._waker = asyncio.get_running_loop().create_task(self._wake())

    async def _wake(self) -> None:
        async with self._cond:
            self._cond.notify_all()

    def __aiter__(self) -> AsyncIterator[StatusEvent]:
        return self

    async def __anext__(self) -> StatusEvent:
        async with self._cond:
            await self._cond.wait_for(lambda: bool(self._buffer) or self._closed)
            if not self._buffer:
                raise StopAsyncIteration
            event = self._buffer.popleft()
            self._cond.notify_all()
            return event

    async def collect(self) -> list[StatusEvent]:
        """Drain the stream until it closes."""
        return [event async for event in self]

    async def last(self) -> StatusEvent | None:
        """Drain the stream and return its final event."""
        final: StatusEvent | None = None
        async for event in self:
            final = event
        return final
