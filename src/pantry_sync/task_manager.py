"""Lifecycle manager for detached asyncio tasks launched by widgets."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

ErrorHandler = Callable[[BaseException], None]


class TaskManager:
    """Track background tasks so errors are observed and shutdown is clean.

    Named tasks are "latest wins": spawning under a name that still has a
    pending task cancels the older one. Anonymous tasks run side by side and
    drop out of tracking once they finish.
    """

    def __init__(self) -> None:
        self._named: dict[str, asyncio.Task[Any]] = {}
        self._anonymous: set[asyncio.Task[Any]] = set()

    def spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        *,
        name: str | None = None,
        on_error: ErrorHandler | None = None,
    ) -> asyncio.Task[Any]:
        """Schedule ``coro`` on the running loop and track it.

        ``on_error`` receives any exception the task ends with; without it the
        exception is logged so it is never lost.
        """
        task = asyncio.create_task(coro)
        if name is not None:
            previous = self._named.get(name)
            if previous is not None and not previous.done():
                previous.cancel()
                # Still tracked until the cancellation has been processed.
                self._anonymous.add(previous)
                previous.add_done_callback(self._anonymous.discard)
                LOGGER.debug(
                    "task.replaced", extra={"event": "task.replaced", "name": name}
                )
            self._named[name] = task
            task.add_done_callback(lambda t, n=name: self._forget(n, t))
        else:
            self._anonymous.add(task)
            task.add_done_callback(self._anonymous.discard)
        task.add_done_callback(lambda t: self._report(t, name, on_error))
        return task

    def _forget(self, name: str, task: asyncio.Task[Any]) -> None:
        if self._named.get(name) is task:
            del self._named[name]

    def _report(
        self,
        task: asyncio.Task[Any],
        name: str | None,
        on_error: ErrorHandler | None,
    ) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if on_error is not None:
            on_error(exc)
            return
        LOGGER.warning(
            "task.failed",
            extra={
                "event": "task.failed",
                "name": name,
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
        )

    @property
    def pending(self) -> list[asyncio.Task[Any]]:
        tasks = list(self._named.values()) + list(self._anonymous)
        return [task for task in tasks if not task.done()]

    async def cancel_all(self) -> None:
        """Cancel every tracked task and await them all."""
        tasks = self.pending
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._named.clear()
        self._anonymous.clear()

    async def wait_idle(self) -> None:
        """Wait until no tracked task is pending, including tasks spawned meanwhile."""
        while True:
            tasks = self.pending
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
