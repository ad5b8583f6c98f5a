"""Custom exception hierarchy for clusterwait.

All clusterwait-specific exceptions inherit from ClusterWaitError, enabling
users to catch every wait failure with a single except clause.
"""

from __future__ import annotations


class ClusterWaitError(Exception):
    """Base exception for all clusterwait errors."""


class ConfigurationError(ClusterWaitError):
    """Raised for invalid configuration or missing required settings."""


class WaitAbortedError(ClusterWaitError):
    """Raised when a wait ends because the caller aborted it."""


class WaitCancelledError(WaitAbortedError):
    """Raised when the cancellation trigger fired (explicitly or by deadline)."""

    def __init__(self, resource_id: str, *, deadline_exceeded: bool = False) -> None:
        self.resource_id = resource_id
        self.deadline_exceeded = deadline_exceeded
        reason = "deadline exceeded" if deadline_exceeded else "cancelled"
        super().__init__(f"Wait for {resource_id} aborted: {reason}")


class WaitStoppedError(WaitAbortedError):
    """Raised when the external stop trigger fired."""

    def __init__(self, resource_id: str) -> None:
        self.resource_id = resource_id
        super().__init__(f"Wait for {resource_id} stopped")


class ResourceNotFoundError(ClusterWaitError):
    """Raised when the watched resource disappeared while it was expected to exist."""

    def __init__(self, resource_id: str, cause: BaseException | None = None) -> None:
        self.resource_id = resource_id
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{resource_id} does not exist{detail}")


class FailureStatusError(ClusterWaitError):
    """Raised when the provider reports a terminal failure status."""

    def __init__(self, resource_id: str, status: str, desired: str) -> None:
        self.resource_id = resource_id
        self.status = status
        self.desired = desired
        super().__init__(
            f"Unexpected status {status!r} for {resource_id} (desired {desired!r})"
        )


class EmptyResponseError(ClusterWaitError):
    """Raised when a status query succeeded but returned no usable payload."""

    def __init__(self, resource_id: str, response: object = None) -> None:
        self.resource_id = resource_id
        self.response = response
        super().__init__(f"Unexpected empty response for {resource_id}: {response!r}")
