"""clusterwait - Watch long-running EKS operations until they settle.

Example:

    from clusterwait import Cancellation, ClusterStatus, load_settings
    from clusterwait.providers.eks import EKSModule, poll_cluster

    settings = load_settings()
    stream = poll_cluster(
        eks,
        "demo",
        ClusterStatus.ACTIVE,
        initial_wait=settings.initial_wait,
        poll_interval=settings.poll_interval,
        cancel=settings.cancellation(),
    )
    async for event in stream:
        print(event.kind, event.snapshot and event.snapshot.status, event.error)
"""

from clusterwait.cancellation import Cancellation
from clusterwait.classify import ErrorClass, classify, is_cluster_deleted, is_update_missing, not_found
from clusterwait.config import WaitSettings, load_settings
from clusterwait.constants import ClusterStatus, UpdateStatus
from clusterwait.core.exceptions import (
    ClusterWaitError,
    ConfigurationError,
    EmptyResponseError,
    FailureStatusError,
    ResourceNotFoundError,
    WaitAbortedError,
    WaitCancelledError,
    WaitStoppedError,
)
from clusterwait.engine import PollEngine, StatusStrategy
from clusterwait.observability import LogConfig, setup_logging, teardown_logging
from clusterwait.stream import EventStream, StreamClosedError
from clusterwait.types import EventKind, StatusEvent, StatusSnapshot, TickHook, WaitConfig

__all__ = [
    "Cancellation",
    "ClusterStatus",
    "ClusterWaitError",
    "ConfigurationError",
    "EmptyResponseError",
    "ErrorClass",
    "EventKind",
    "EventStream",
    "FailureStatusError",
    "LogConfig",
    "PollEngine",
    "ResourceNotFoundError",
    "StatusEvent",
    "StatusSnapshot",
    "StatusStrategy",
    "StreamClosedError",
    "TickHook",
    "UpdateStatus",
    "WaitAbortedError",
    "WaitCancelledError",
    "WaitConfig",
    "WaitSettings",
    "WaitStoppedError",
    "classify",
    "is_cluster_deleted",
    "is_update_missing",
    "load_settings",
    "not_found",
    "setup_logging",
    "teardown_logging",
]
