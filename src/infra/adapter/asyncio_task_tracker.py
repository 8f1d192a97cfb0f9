import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.stdlib.get_logger(__name__)


class BackgroundTaskTracker:
    """Owns detached asyncio tasks so they can be drained on shutdown.

    Callers hand work over with :meth:`spawn` and return immediately. Failures
    are logged when the task finishes. :meth:`shutdown` waits for pending work up
    to a grace period, then cancels whatever is left.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro, name=name)

        self._tasks.add(task)
        task.add_done_callback(self._on_done)

        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning(f"Background task '{task.get_name()}' was cancelled")
            return

        error = task.exception()
        if error is not None:
            logger.error(f"Background task '{task.get_name()}' failed", exc_info=error)

    async def shutdown(self, grace_seconds: float) -> None:
        if not self._tasks:
            return

        logger.info(f"Waiting up to {grace_seconds}s for {len(self._tasks)} background task(s)")

        _, pending = await asyncio.wait(set(self._tasks), timeout=grace_seconds)

        for task in pending:
            task.cancel()

        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
