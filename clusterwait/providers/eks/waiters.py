"""Entry points for watching EKS clusters and cluster updates.

Example:
    stream = poll_cluster(
        eks,
        "demo",
        ClusterStatus.ACTIVE,
        initial_wait=90,
        poll_interval=10,
        cancel=Cancellation(timeout=1800),
    )
    async for event in stream:
        if event.snapshot:
            print(event.snapshot.status)
"""

from __future__ import annotations

import asyncio

from clusterwait.cancellation import Cancellation
from clusterwait.constants import (
    CLUSTER_FAILURE_STATUSES,
    DEFAULT_INITIAL_WAIT,
    DEFAULT_POLL_INTERVAL,
    UPDATE_FAILURE_STATUSES,
)
from clusterwait.engine import PollEngine
from clusterwait.stream import EventStream
from clusterwait.types import TickHook, WaitConfig

from .clients import EKSClientFactory
from .strategies import ClusterStatusStrategy, UpdateStatusStrategy


def poll_cluster(
    eks: EKSClientFactory,
    cluster_name: str,
    desired_status: str,
    *,
    initial_wait: float = DEFAULT_INITIAL_WAIT,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    cancel: Cancellation | None = None,
    stop: asyncio.Event | None = None,
    on_tick: TickHook | None = None,
) -> EventStream:
    """Watch a cluster until it reaches ``desired_status``.

    Pass ``ClusterStatus.DELETED_OR_NOT_EXIST`` to wait for deletion; the
    cluster disappearing then counts as success.
    """
    config = WaitConfig(
        resource_id=cluster_name,
        desired_status=desired_status,
        failure_statuses=CLUSTER_FAILURE_STATUSES,
        initial_wait=initial_wait,
        poll_interval=poll_interval,
        on_tick=on_tick,
        cancel=cancel or Cancellation(),
        stop=stop or asyncio.Event(),
    )
    return PollEngine(ClusterStatusStrategy(eks)).start(config)


def poll_update(
    eks: EKSClientFactory,
    cluster_name: str,
    update_id: str,
    desired_status: str,
    *,
    initial_wait: float = DEFAULT_INITIAL_WAIT,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    cancel: Cancellation | None = None,
    stop: asyncio.Event | None = None,
    on_tick: TickHook | None = None,
) -> EventStream:
    """Watch a cluster update until it reaches ``desired_status``.

    A missing update always ends the watch with ``ResourceNotFoundError``.
    """
    config = WaitConfig(
        resource_id=update_id,
        desired_status=desired_status,
        failure_statuses=UPDATE_FAILURE_STATUSES,
        initial_wait=initial_wait,
        poll_interval=poll_interval,
        on_tick=on_tick,
        cancel=cancel or Cancellation(),
        stop=stop or asyncio.Event(),
    )
    return PollEngine(UpdateStatusStrategy(eks, cluster_name)).start(config)
