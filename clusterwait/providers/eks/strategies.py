"""Status strategies for EKS clusters and cluster updates.

Both strategies open a client per query, the way the rest of the EKS
integration uses client factories, and return the raw API object as the
snapshot payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from clusterwait.classify import is_cluster_deleted, is_update_missing
from clusterwait.constants import ClusterStatus

from .clients import EKSClientFactory


class ClusterStatusStrategy:
    """Observes ``DescribeCluster``; the resource id is the cluster name."""

    description = "cluster"
    absent_status: str | None = ClusterStatus.DELETED_OR_NOT_EXIST.value

    def __init__(self, eks: EKSClientFactory) -> None:
        self._eks = eks

    async def query(self, resource_id: str) -> Mapping[str, Any] | None:
        async with self._eks() as client:
            response = await client.describe_cluster(name=resource_id)
        return response.get("cluster")

    def status_of(self, payload: Mapping[str, Any]) -> str:
        return str(payload.get("status", ""))

    def is_absent(self, exc: BaseException) -> bool:
        return is_cluster_deleted(exc)

    def log_fields(self, payload: Mapping[str, Any]) -> dict[str, str]:
        fields: dict[str, str] = {}
        if version := payload.get("version"):
            fields["version"] = str(version)
        return fields


class UpdateStatusStrategy:
    """Observes ``DescribeUpdate``; the resource id is the update id."""

    description = "cluster update"
    absent_status: str | None = None

    def __init__(self, eks: EKSClientFactory, cluster_name: str) -> None:
        self._eks = eks
        self.cluster_name = cluster_name

    async def query(self, resource_id: str) -> Mapping[str, Any] | None:
        async with self._eks() as client:
            response = await client.describe_update(
                name=self.cluster_name,
                updateId=resource_id,
            )
        return response.get("update")

    def status_of(self, payload: Mapping[str, Any]) -> str:
        return str(payload.get("status", ""))

    def is_absent(self, exc: BaseException) -> bool:
        return is_update_missing(exc)

    def log_fields(self, payload: Mapping[str, Any]) -> dict[str, str]:
        return {
            "cluster": self.cluster_name,
            "update-type": str(payload.get("type", "")),
        }
