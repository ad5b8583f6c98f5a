"""Centralized constants and enums for clusterwait.

Status vocabularies follow the EKS API; the deleted pseudo-status has no
counterpart on the provider side and is only ever used as a desired state.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

# =============================================================================
# EKS Cluster Statuses
# =============================================================================


class ClusterStatus(StrEnum):
    """EKS cluster status values."""

    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    DELETING = "DELETING"
    FAILED = "FAILED"
    UPDATING = "UPDATING"
    PENDING = "PENDING"
    DELETED_OR_NOT_EXIST = "DELETED/ORNOTEXIST"


# =============================================================================
# EKS Update Statuses
# =============================================================================


class UpdateStatus(StrEnum):
    """EKS cluster update status values."""

    IN_PROGRESS = "InProgress"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    SUCCESSFUL = "Successful"


CLUSTER_FAILURE_STATUSES: Final = frozenset({ClusterStatus.FAILED.value})
UPDATE_FAILURE_STATUSES: Final = frozenset(
    {UpdateStatus.FAILED.value, UpdateStatus.CANCELLED.value}
)

# =============================================================================
# Error Classification
# =============================================================================

NOT_FOUND_CODE: Final = "ResourceNotFoundException"
CLUSTER_NOT_FOUND_PREFIX: Final = "No cluster found for"
CLUSTER_NOT_FOUND_TEXT: Final = "No cluster found for name: "
UPDATE_NOT_FOUND_PREFIX: Final = "No update found for"
UPDATE_NOT_FOUND_TEXT: Final = "No update found"

# =============================================================================
# Polling Defaults (in seconds)
# =============================================================================

DEFAULT_INITIAL_WAIT: Final = 0.0
DEFAULT_POLL_INTERVAL: Final = 10.0
STREAM_CAPACITY: Final = 10
