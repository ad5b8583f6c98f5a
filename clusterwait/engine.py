"""Status polling engine.

Watches one resource per run by querying it repeatedly until it reaches the
desired status, a failure status, disappears, or the caller aborts. Every
observation is published on an EventStream that is closed exactly once when
the run ends.

Timeline of a run::

    query ── PROGRESS ── initial_wait ── query ── PROGRESS ── poll_interval ── query ── DESIRED
      ^ no wait before the first query            (cancel/stop raced at every wait)

Example:
    engine = PollEngine(ClusterStatusStrategy(eks))
    stream = engine.start(WaitConfig(resource_id="demo", desired_status="ACTIVE"))
    async for event in stream:
        ...
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Protocol

from loguru import logger

from .classify import ErrorClass, classify
from .constants import STREAM_CAPACITY
from .core.exceptions import (
    ClusterWaitError,
    EmptyResponseError,
    FailureStatusError,
    ResourceNotFoundError,
    WaitCancelledError,
    WaitStoppedError,
)
from .stream import EventStream
from .types import EventKind, StatusEvent, StatusSnapshot, WaitConfig

# In-flight runs, held until they finish.
_running: set[asyncio.Task[None]] = set()

# =============================================================================
# Strategy
# =============================================================================


class StatusStrategy(Protocol):
    """What a watch observes and how to read it.

    Attributes:
        description: Human-readable name used in logs (e.g. ``"cluster"``).
        absent_status: Desired status meaning "the resource is gone", or None
            when absence can never be the goal.
    """

    description: str
    absent_status: str | None

    async def query(self, resource_id: str) -> Mapping[str, Any] | None:
        """Fetch the current payload of the resource, or None if the response was empty."""
        ...

    def status_of(self, payload: Mapping[str, Any]) -> str: ...

    def is_absent(self, exc: BaseException) -> bool: ...

    def log_fields(self, payload: Mapping[str, Any]) -> dict[str, str]: ...


# =============================================================================
# Engine
# =============================================================================


class PollEngine:
    """Runs poll loops for a single strategy.

    Each ``start`` spawns an independent task; runs share no state beyond
    the strategy, which must be safe to query concurrently.
    """

    def __init__(self, strategy: StatusStrategy, *, capacity: int = STREAM_CAPACITY) -> None:
        self._strategy = strategy
        self._capacity = capacity

    def start(self, config: WaitConfig) -> EventStream:
        """Begin watching and return the run's event stream immediately.

        Must be called from a running event loop.
        """
        stream = EventStream(self._capacity)
        task = asyncio.get_running_loop().create_task(
            self._run(config, stream),
            name=f"poll-{self._strategy.description}-{config.resource_id}",
        )
        _running.add(task)
        task.add_done_callback(_running.discard)
        task.add_done_callback(lambda t: _close_abandoned(t, stream, config))
        return stream

    async def wait(self, config: WaitConfig) -> StatusEvent:
        """Run a watch to completion and return its final event.

        Raises:
            The final event's error when the watch did not succeed.
        """
        final = await self.start(config).last()
        if final is None:
            raise ClusterWaitError(f"Watch of {config.resource_id} ended without a final event")
        if final.error is not None:
            raise final.error
        return final

    async def _run(self, config: WaitConfig, stream: EventStream) -> None:
        log = logger.bind(
            component="poller",
            resource=config.resource_id,
            desired=config.desired_status,
        )
        log.info(
            f"Polling {self._strategy.description} "
            f"(initial wait {config.initial_wait}s, interval {config.poll_interval}s, "
            f"time left {config.cancel.describe_time_left()})"
        )
        try:
            final = await self._poll(config, stream, log)
            await stream.send(final)
        except asyncio.CancelledError:
            log.warning("Poll task cancelled")
            if not stream.closed:
                stream.send_final(StatusEvent(
                    EventKind.CANCELLED,
                    error=WaitCancelledError(config.resource_id),
                ))
            raise
        finally:
            if not stream.closed:
                await stream.close()

    async def _poll(self, config: WaitConfig, stream: EventStream, log: Any) -> StatusEvent:
        started = time.monotonic()
        grace_pending = True

        while True:
            if (aborted := self._aborted(config, log)) is not None:
                return aborted

            event = await self._tick(config, log, started)
            if event.terminal:
                return event
            await stream.send(event)

            delay = config.poll_interval
            if event.kind is EventKind.PROGRESS and event.snapshot is not None:
                self._notify(config, event.snapshot, log)
                if grace_pending:
                    grace_pending = False
                    delay = max(config.initial_wait, config.poll_interval)
                    log.info(f"Sleeping initial wait {delay}s")

            if (aborted := await self._sleep(config, delay, log)) is not None:
                return aborted

    async def _tick(self, config: WaitConfig, log: Any, started: float) -> StatusEvent:
        resource_id = config.resource_id
        try:
            payload = await self._strategy.query(resource_id)
        except Exception as exc:
            absence_desired = (
                self._strategy.absent_status is not None
                and config.desired_status == self._strategy.absent_status
            )
            match classify(exc, is_absent=self._strategy.is_absent, absence_desired=absence_desired):
                case ErrorClass.ABSENT_EXPECTED:
                    log.info(f"{self._strategy.description} already gone as desired: {exc}")
                    return StatusEvent(EventKind.ABSENT)
                case ErrorClass.ABSENT_UNEXPECTED:
                    log.warning(f"{self._strategy.description} does not exist; aborting: {exc}")
                    return StatusEvent(
                        EventKind.NOT_FOUND,
                        error=ResourceNotFoundError(resource_id, exc),
                    )
                case ErrorClass.TRANSIENT:
                    log.warning(f"Query failed; retrying: {type(exc).__name__}: {exc}")
                    return StatusEvent(EventKind.QUERY_ERROR, error=exc)

        if not payload:
            log.warning("Expected non-empty response; retrying")
            return StatusEvent(
                EventKind.EMPTY_RESPONSE,
                error=EmptyResponseError(resource_id, payload),
            )

        status = self._strategy.status_of(payload)
        snapshot = StatusSnapshot(
            resource_id=resource_id,
            status=status,
            payload=payload,
            fetched_at=datetime.now(UTC),
        )
        extra = "".join(f" | {k}={v}" for k, v in self._strategy.log_fields(payload).items())
        log.info(
            f"Poll | status={status}{extra} | "
            f"started {time.monotonic() - started:.1f}s ago | "
            f"time left {config.cancel.describe_time_left()}"
        )

        if status == config.desired_status:
            log.info(f"Desired {self._strategy.description} status reached: {status}")
            return StatusEvent(EventKind.DESIRED, snapshot=snapshot)
        if status in config.failure_statuses:
            log.warning(f"{self._strategy.description} reached failure status {status}")
            return StatusEvent(
                EventKind.FAILED,
                snapshot=snapshot,
                error=FailureStatusError(resource_id, status, config.desired_status),
            )
        return StatusEvent(EventKind.PROGRESS, snapshot=snapshot)

    def _notify(self, config: WaitConfig, snapshot: StatusSnapshot, log: Any) -> None:
        if config.on_tick is None:
            return
        try:
            config.on_tick(snapshot)
        except Exception:
            log.exception("Tick hook failed; continuing")

    async def _sleep(self, config: WaitConfig, delay: float, log: Any) -> StatusEvent | None:
        """Wait ``delay`` seconds unless cancellation or stop fires first."""
        if delay > 0:
            waiters = {
                asyncio.ensure_future(config.cancel.wait()),
                asyncio.ensure_future(config.stop.wait()),
            }
            try:
                await asyncio.wait(waiters, timeout=delay, return_when=asyncio.FIRST_COMPLETED)
            finally:
                for waiter in waiters:
                    waiter.cancel()
                await asyncio.gather(*waiters, return_exceptions=True)
        return self._aborted(config, log)

    def _aborted(self, config: WaitConfig, log: Any) -> StatusEvent | None:
        if config.cancel.cancelled:
            deadline = config.cancel.deadline_exceeded
            log.warning(f"Wait aborted ({'deadline exceeded' if deadline else 'cancelled'})")
            return StatusEvent(
                EventKind.CANCELLED,
                error=WaitCancelledError(config.resource_id, deadline_exceeded=deadline),
            )
        if config.stop.is_set():
            log.warning("Wait stopped")
            return StatusEvent(EventKind.STOPPED, error=WaitStoppedError(config.resource_id))
        return None


def _close_abandoned(task: asyncio.Task[None], stream: EventStream, config: WaitConfig) -> None:
    """Close the stream of a run cancelled before its body started."""
    if task.cancelled() and not stream.closed:
        stream.send_final(StatusEvent(
            EventKind.CANCELLED,
            error=WaitCancelledError(config.resource_id),
        ))
