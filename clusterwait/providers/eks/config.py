"""EKS provider configuration.

Immutable configuration dataclass for reaching the EKS API.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EKS:
    """EKS connection configuration.

    Example:
        >>> from clusterwait.providers.eks import EKS
        >>> config = EKS(region="us-west-2")

    Args:
        region: AWS region of the cluster. Default: us-east-1
        profile: Named AWS profile. If None, uses the default credential chain.
        endpoint_url: Custom EKS endpoint (e.g. a beta endpoint or a local stub).
    """

    region: str = "us-east-1"
    profile: str | None = None
    endpoint_url: str | None = None
