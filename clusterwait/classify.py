"""Classification of status query errors.

The only distinction the poll loop needs is whether an error means the
watched resource is gone. The EKS API signals this with a structured
``ResourceNotFoundException``, but some client paths surface it as a plain
exception, so the predicates also fall back to the error text.

Example:
    from clusterwait.classify import is_cluster_deleted, classify

    match classify(exc, is_absent=is_cluster_deleted, absence_desired=True):
        case ErrorClass.ABSENT_EXPECTED:
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from botocore.exceptions import ClientError

from .constants import (
    CLUSTER_NOT_FOUND_PREFIX,
    CLUSTER_NOT_FOUND_TEXT,
    NOT_FOUND_CODE,
    UPDATE_NOT_FOUND_PREFIX,
    UPDATE_NOT_FOUND_TEXT,
)

AbsencePredicate = Callable[[BaseException], bool]


class ErrorClass(Enum):
    ABSENT_EXPECTED = "absent-expected"
    ABSENT_UNEXPECTED = "absent-unexpected"
    TRANSIENT = "transient"


def _error_fields(exc: BaseException) -> tuple[str, str]:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return error.get("Code", ""), error.get("Message", "")
    return "", ""


def not_found(prefix: str, fallback: str) -> AbsencePredicate:
    """Create a predicate matching a not-found error.

    Args:
        prefix: Message prefix expected alongside ``ResourceNotFoundException``.
        fallback: Substring searched in ``str(exc)`` when the error is not
            structured (or its code/message do not match).
    """

    def predicate(exc: BaseException) -> bool:
        code, message = _error_fields(exc)
        if code == NOT_FOUND_CODE and message.startswith(prefix):
            return True
        return fallback in str(exc)

    return predicate


is_cluster_deleted = not_found(CLUSTER_NOT_FOUND_PREFIX, CLUSTER_NOT_FOUND_TEXT)
"""True when the error says the EKS cluster does not exist."""

is_update_missing = not_found(UPDATE_NOT_FOUND_PREFIX, UPDATE_NOT_FOUND_TEXT)
"""True when the error says the EKS cluster update does not exist."""


def classify(
    exc: BaseException,
    *,
    is_absent: AbsencePredicate,
    absence_desired: bool,
) -> ErrorClass:
    if not is_absent(exc):
        return ErrorClass.TRANSIENT
    return ErrorClass.ABSENT_EXPECTED if absence_desired else ErrorClass.ABSENT_UNEXPECTED
