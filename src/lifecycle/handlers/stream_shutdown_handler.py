from __future__ import annotations
import asyncio
import contextlib

from lifecycle.cancellation import CancellationToken
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class StreamShutdownHandler(IShutdownHandler):
    """
    Stops the DisplayCAL color stream.

    Fires the stream's cancellation token and gives the supervisor task
    stop_timeout seconds to unwind on its own before cancelling it.

    Priority: 150 (first: nothing new reaches the LEDs after this)
    """

    def __init__(self, token: CancellationToken, task: asyncio.Task, stop_timeout: float = 1.0):
        self.token = token
        self.task = task
        self.stop_timeout = stop_timeout

    @property
    def shutdown_priority(self) -> int:
        return 150

    async def shutdown(self) -> None:
        log.info("Stopping color stream...")
        self.token.cancel()

        if self.task.done():
            return

        done, _ = await asyncio.wait({self.task}, timeout=self.stop_timeout)
        if done:
            log.debug("Color stream stopped")
            return

        log.warn("timeout waiting for web interface loop to stop", timeout=f"{self.stop_timeout}s")
        self.task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self.task
