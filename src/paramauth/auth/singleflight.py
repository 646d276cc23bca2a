"""Per-key coalescing of concurrent async work.

When several coroutines miss the token cache for the same key at once,
only the first one should call the authorization server.
:class:`SingleFlight` runs the first caller's coroutine as a task and makes
every caller that arrives while it is pending await that same task. The
entry is dropped as soon as the task finishes, so the next miss starts a
fresh call.

Callers share outcomes: they all receive the same result, or the same
exception. A caller that is cancelled while waiting does not cancel the
shared task.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Deduplicates in-flight calls by key.

    Example::

        flight: SingleFlight[str] = SingleFlight()
        token = await flight.run("acme", lambda: refresh("acme"))
    """

    def __init__(self) -> None:
        self._calls: dict[str, asyncio.Task[T]] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._calls

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """Await the pending call for *key*, or start one with *factory*.

        Args:
            key: Deduplication key.
            factory: Creates the awaitable to run when no call is pending.

        Returns:
            The shared result.
        """
        task = self._calls.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._calls[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task[T]) -> None:
        if self._calls.get(key) is task:
            del self._calls[key]
        # Mark the outcome as observed when every waiter was cancelled.
        if not task.cancelled():
            task.exception()
