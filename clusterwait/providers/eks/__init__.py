"""EKS integration for clusterwait.

Example:
    from clusterwait.providers.eks import EKS, EKSModule, poll_cluster
"""

from clusterwait.providers.eks.clients import EKSClientFactory, EKSModule, eks_client_factory
from clusterwait.providers.eks.config import EKS
from clusterwait.providers.eks.strategies import ClusterStatusStrategy, UpdateStatusStrategy
from clusterwait.providers.eks.waiters import poll_cluster, poll_update

__all__ = [
    "EKS",
    "ClusterStatusStrategy",
    "EKSClientFactory",
    "EKSModule",
    "UpdateStatusStrategy",
    "eks_client_factory",
    "poll_cluster",
    "poll_update",
]
