"""EKS client factories with dependency injection.

Provides typed client factories that can be injected into strategies.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

import aioboto3
from injector import Module, provider, singleton

from .config import EKS

class EKSClientFactory:
    """Wrapper for EKS client factory."""

    def __init__(self, factory: Callable[[], AbstractAsyncContextManager[Any]]) -> None:
        self._factory = factory

    def __call__(self) -> AbstractAsyncContextManager[Any]:
        return self._factory()


def eks_client_factory(session: aioboto3.Session, config: EKS) -> EKSClientFactory:
    @asynccontextmanager
    async def factory() -> AsyncIterator[Any]:
        async with session.client(
            "eks",
            region_name=config.region,
            endpoint_url=config.endpoint_url,
        ) as client:
            yield client

    return EKSClientFactory(factory)


class EKSModule(Module):
    """DI module that provides the EKS client factory.

    Usage:
        >>> from injector import Injector
        >>> injector = Injector([EKSModule()])
        >>> injector.binder.bind(EKS, to=EKS(region="us-west-2"))
        >>> eks = injector.get(EKSClientFactory)
        >>> async with eks() as client:
        ...     await client.describe_cluster(name="demo")
    """

    @singleton
    @provider
    def provide_session(self, config: EKS) -> aioboto3.Session:
        """Provide singleton aioboto3 session."""
        return aioboto3.Session(profile_name=config.profile)

    @singleton
    @provider
    def provide_eks(self, session: aioboto3.Session, config: EKS) -> EKSClientFactory:
        """Provide EKS client factory."""
        return eks_client_factory(session, config)


__all__ = [
    "EKSClientFactory",
    "EKSModule",
    "eks_client_factory",
]
