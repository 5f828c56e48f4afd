"""
ColorStream - DisplayCAL color polling loop
===========================================

Repeatedly asks the DisplayCAL web interface which color to show and puts
every decoded color on an asyncio.Queue, in order, until something goes wrong
or the cancellation token fires.

One run() call is one honest attempt: it never retries. Reconnecting with a
delay is the job of ColorStreamSupervisor.

Blocking points (both guarded by the token):
1. the HTTP request: connect, send, and full body read as one unit
2. queue.put(): waits for the consumer when the queue is full
"""

from __future__ import annotations

import asyncio
from typing import NoReturn, Optional

import httpx

from displaycal.codec import INITIAL_COLOR, build_locator, parse_color
from displaycal.errors import DecodeError, ResponseDecodeError, StreamCancelled, TransportError
from lifecycle.cancellation import CancellationToken, OperationCancelledError
from models.color import Color
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STREAM)


class ColorStream:
    """
    DisplayCAL color stream client.

    Usage:
        stream = ColorStream()
        queue: asyncio.Queue[Color] = asyncio.Queue(maxsize=1)
        token = CancellationToken()

        try:
            await stream.run(token, "http://localhost:8080", queue)
        except StreamCancelled:
            ...  # asked to stop
        except ColorStreamError as e:
            ...  # log, wait, call run() again
    """

    def __init__(
        self,
        request_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            request_timeout: Per-request timeout in seconds. None waits
                indefinitely (DisplayCAL holds the request until the color
                changes, so long waits are normal).
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.request_timeout = request_timeout
        self._transport = transport

    async def run(
        self,
        cancel: CancellationToken,
        base_url: str,
        out: asyncio.Queue[Color],
    ) -> NoReturn:
        """
        Poll base_url and deliver colors to out until failure or cancellation.

        Never returns normally.

        Raises:
            StreamCancelled: token fired during a request or a delivery
            TransportError: request failed or status was not 200
            ResponseDecodeError: body was not a #RRGGBB color
        """
        last_color = INITIAL_COLOR
        log.debug("Color stream started", url=base_url)

        async with httpx.AsyncClient(timeout=self.request_timeout, transport=self._transport) as client:
            while True:
                locator = build_locator(base_url, last_color)
                body = await self._fetch(client, cancel, locator)

                try:
                    color = parse_color(body)
                except DecodeError as e:
                    raise ResponseDecodeError(locator, e) from e

                last_color = color
                log.debug("Decoded color", color=color)

                try:
                    await cancel.guard(out.put(color))
                except OperationCancelledError as e:
                    raise StreamCancelled("send color", e.reason) from e

    async def _fetch(self, client: httpx.AsyncClient, cancel: CancellationToken, locator: str) -> bytes:
        """GET locator and return the body of a 200 response."""
        try:
            response = await cancel.guard(client.get(locator))
        except OperationCancelledError as e:
            raise StreamCancelled(f"request {locator!r}", e.reason) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(locator, f"{type(e).__name__}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise TransportError(
                locator, f"http status: {response.status_code}", status=response.status_code
            )

        return response.content
