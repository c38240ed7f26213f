"""Structured cancellation for client requests."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class CancellationToken:
    """Cancels every request started with it.

    A view owns one token and passes it to each outgoing request. Cancelling
    the token cancels the requests still in flight, and any request started
    afterwards is refused.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._tasks: set[asyncio.Future] = set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        for task in list(self._tasks):
            task.cancel()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` as a task tied to this token."""
        if self._cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise asyncio.CancelledError("request cancelled")

        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        try:
            return await task
        finally:
            self._tasks.discard(task)
