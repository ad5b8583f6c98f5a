from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from botocore.exceptions import ClientError

from clusterwait.classify import is_cluster_deleted


def client_error(code: str, message: str, operation: str = "DescribeCluster") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def cluster_not_found(name: str = "demo") -> ClientError:
    return client_error("ResourceNotFoundException", f"No cluster found for name: {name}.")


class ScriptedStrategy:
    """Replays a script of payloads / exceptions, repeating the last entry."""

    description = "cluster"
    absent_status: str | None = "DELETED/ORNOTEXIST"

    def __init__(self, *script: Mapping[str, Any] | BaseException | None) -> None:
        self._script = list(script)
        self.calls: list[float] = []

    async def query(self, resource_id: str) -> Mapping[str, Any] | None:
        self.calls.append(asyncio.get_running_loop().time())
        index = min(len(self.calls) - 1, len(self._script) - 1)
        item = self._script[index]
        if isinstance(item, BaseException):
            raise item
        return item

    def status_of(self, payload: Mapping[str, Any]) -> str:
        return str(payload["status"])

    def is_absent(self, exc: BaseException) -> bool:
        return is_cluster_deleted(exc)

    def log_fields(self, payload: Mapping[str, Any]) -> dict[str, str]:
        return {}


def status(value: str, name: str = "demo") -> dict[str, Any]:
    return {"name": name, "status": value}
