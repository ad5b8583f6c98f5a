"""Data types for status watches.

A watch produces a stream of StatusEvent values. Each event is tagged with
an EventKind so consumers can pattern-match on it:

    async for event in stream:
        match event:
            case StatusEvent(kind=EventKind.PROGRESS, snapshot=snap):
                print(f"{snap.resource_id} is {snap.status}")
            case StatusEvent(kind=EventKind.QUERY_ERROR, error=err):
                print(f"query failed, retrying: {err}")
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from .cancellation import Cancellation
from .constants import DEFAULT_INITIAL_WAIT, DEFAULT_POLL_INTERVAL
from .core.exceptions import ConfigurationError

# =============================================================================
# Snapshots
# =============================================================================


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """One observation of a watched resource."""

    resource_id: str
    status: str
    payload: Mapping[str, Any]
    fetched_at: datetime


# =============================================================================
# Events
# =============================================================================


class EventKind(Enum):
    PROGRESS = "progress"
    DESIRED = "desired"
    ABSENT = "absent"
    FAILED = "failed"
    NOT_FOUND = "not-found"
    QUERY_ERROR = "query-error"
    EMPTY_RESPONSE = "empty-response"
    CANCELLED = "cancelled"
    STOPPED = "stopped"


_TERMINAL_KINDS = frozenset({
    EventKind.DESIRED,
    EventKind.ABSENT,
    EventKind.FAILED,
    EventKind.NOT_FOUND,
    EventKind.CANCELLED,
    EventKind.STOPPED,
})

_SNAPSHOT_KINDS = frozenset({EventKind.PROGRESS, EventKind.DESIRED, EventKind.FAILED})
_ERROR_KINDS = _TERMINAL_KINDS - {EventKind.DESIRED, EventKind.ABSENT} | {
    EventKind.QUERY_ERROR,
    EventKind.EMPTY_RESPONSE,
}


@dataclass(frozen=True, slots=True)
class StatusEvent:
    """A single entry on a watch's event stream.

    Progress and desired events carry only a snapshot, error kinds carry only
    an error, a failure status carries both, and an absent resource whose
    absence was the goal carries neither.
    """

    kind: EventKind
    snapshot: StatusSnapshot | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if (self.snapshot is not None) != (self.kind in _SNAPSHOT_KINDS):
            raise ValueError(f"{self.kind.value} event has wrong snapshot presence")
        if (self.error is not None) != (self.kind in _ERROR_KINDS):
            raise ValueError(f"{self.kind.value} event has wrong error presence")

    @property
    def terminal(self) -> bool:
        return self.kind in _TERMINAL_KINDS

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Configuration
# =============================================================================


class TickHook(Protocol):
    """Called synchronously after each non-terminal observation.

    Runs on the polling path, so it must not block for long.
    """

    def __call__(self, snapshot: StatusSnapshot) -> None: ...


@dataclass(frozen=True, slots=True)
class WaitConfig:
    """Parameters of a single watch.

    Args:
        resource_id: Identifier of the watched resource (cluster name, or
            ``cluster/update-id`` for updates). Must not be empty.
        desired_status: Status that ends the watch successfully.
        failure_statuses: Statuses that end the watch as a failure.
        initial_wait: Grace period in seconds before the second query; never
            shorter than ``poll_interval``.
        poll_interval: Seconds between subsequent queries.
        on_tick: Optional hook invoked after each non-terminal snapshot.
        cancel: Cancellation trigger, optionally carrying a deadline.
        stop: External stop trigger.
    """

    resource_id: str
    desired_status: str
    failure_statuses: frozenset[str] = frozenset()
    initial_wait: float = DEFAULT_INITIAL_WAIT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    on_tick: TickHook | None = None
    cancel: Cancellation = field(default_factory=Cancellation)
    stop: asyncio.Event = field(default_factory=asyncio.Event)

    def __post_init__(self) -> None:
        if not self.resource_id:
            raise ConfigurationError("resource_id must not be empty")
        if not self.desired_status:
            raise ConfigurationError("desired_status must not be empty")
        if self.initial_wait < 0:
            raise ConfigurationError(f"initial_wait must be >= 0, got {self.initial_wait}")
        if self.poll_interval < 0:
            raise ConfigurationError(f"poll_interval must be >= 0, got {self.poll_interval}")
        if self.desired_status in self.failure_statuses:
            raise ConfigurationError(
                f"desired_status {self.desired_status!r} is also a failure status"
            )
