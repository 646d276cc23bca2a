"""Abstract base class for token suppliers.

A :class:`TokenSupplier` is bound to one credential key and one
:class:`~paramauth.models.Strategy` when it is created, and produces a
usable bearer token every time :meth:`~TokenSupplier.get_token` is awaited.
Suppliers are also directly awaitable callables, so they can be passed
wherever a ``Callable[[], Awaitable[str]]`` is expected::

    get_token = manager.client_credentials("blackboard")
    token = await get_token()

To add a strategy, subclass :class:`TokenSupplier`, set
:attr:`~TokenSupplier.strategy`, implement :meth:`~TokenSupplier.get_token`,
and teach :class:`~paramauth.auth.manager.CredentialManager` to build it.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable

from paramauth.models import Strategy

Clock = Callable[[], int]
"""Zero-argument callable returning the current time in epoch milliseconds."""


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class TokenSupplier(ABC):
    """Produces valid bearer tokens for a single credential key.

    Args:
        key: The credential key. Already validated by the manager.
    """

    def __init__(self, key: str) -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    @abstractmethod
    def strategy(self) -> Strategy:
        """The strategy this supplier implements."""
        ...

    @abstractmethod
    async def get_token(self) -> str:
        """Return a token that is valid right now.

        Raises:
            ParamAuthError: A subclass describing why no token could be produced.
        """
        ...

    async def __call__(self) -> str:
        return await self.get_token()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r})"
