from __future__ import annotations
import asyncio
from typing import List

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels the mirror loop (and any other consumer tasks) once the stream
    has stopped feeding them.

    Priority: 120 (after the stream, before the LEDs go black)
    """

    def __init__(self, tasks: List[asyncio.Task]):
        self.tasks = tasks

    @property
    def shutdown_priority(self) -> int:
        return 120

    async def shutdown(self) -> None:
        pending = [t for t in self.tasks if not t.done()]
        if not pending:
            return

        log.info(f"Cancelling {len(pending)} task(s)...", tasks=", ".join(t.get_name() for t in pending))
        for task in pending:
            task.cancel()

        await asyncio.gather(*pending, return_exceptions=True)
        log.debug("Tasks cancelled")
