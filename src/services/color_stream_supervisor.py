"""
Color Stream Supervisor

Keeps a ColorStream alive: whenever run() fails with anything other than
cancellation, the error is logged and run() is called again after
reconnect_delay. The delay itself stops early when the token fires.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from displaycal.errors import ColorStreamError, StreamCancelled
from displaycal.stream import ColorStream
from lifecycle.cancellation import CancellationToken, OperationCancelledError
from models.color import Color
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STREAM)


class ColorStreamSupervisor:
    """
    Reconnect loop around ColorStream.run().

    Example:
        supervisor = ColorStreamSupervisor(ColorStream(), "http://localhost:8080", queue)
        stopped = await supervisor.run(token)   # returns once the token fires
    """

    def __init__(
        self,
        stream: ColorStream,
        base_url: str,
        out: asyncio.Queue[Color],
        reconnect_delay: float = 1.0,
    ):
        self.stream = stream
        self.base_url = base_url
        self.out = out
        self.reconnect_delay = reconnect_delay

        self.attempts = 0
        self.failures = 0
        self.last_error: Optional[ColorStreamError] = None

    async def run(self, cancel: CancellationToken) -> StreamCancelled:
        """
        Run the stream until the token fires.

        Returns:
            The StreamCancelled error that ended the last attempt
        """
        while True:
            self.attempts += 1
            try:
                await self.stream.run(cancel, self.base_url, self.out)
            except StreamCancelled as e:
                log.info("Color stream stopped", reason=e.reason, step=e.step)
                return e
            except ColorStreamError as e:
                self.failures += 1
                self.last_error = e
                log.error(f"read color: {e}", attempt=self.attempts)

            log.debug(f"Reconnecting in {self.reconnect_delay}s")
            try:
                await cancel.guard(asyncio.sleep(self.reconnect_delay))
            except OperationCancelledError as e:
                stopped = StreamCancelled("reconnect", e.reason)
                log.info("Color stream stopped", reason=e.reason, step=stopped.step)
                return stopped
