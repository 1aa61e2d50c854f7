import asyncio
import logging
from typing import Awaitable, Optional, Set

logger = logging.getLogger("announcer.tasks")


class BackgroundRunner:
    """Owns fire-and-forget tasks (announcements, switch resets).

    Callers never await the result; failures are only logged.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Awaitable, name: Optional[str] = None) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug(f"Background task {task.get_name()} cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Background task {task.get_name()} failed: {exc}", exc_info=exc)

    async def join(self) -> None:
        """Wait for every outstanding task, including ones spawned meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self, grace: float = 0.0) -> None:
        """Give outstanding tasks up to `grace` seconds to finish, then cancel the rest."""
        if grace > 0 and self._tasks:
            await asyncio.wait(list(self._tasks), timeout=grace)
        for t in list(self._tasks):
            t.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        logger.info("BackgroundRunner stopped")
