"""
Cancellation token
------------------

Caller-owned stop signal for long-running loops. A token is cancelled either
explicitly (cancel()) or by a deadline (cancel_after()). Loops do not poll it;
they wrap each blocking await in guard(), which races the await against the
token and tears the await down when the token wins.

Example:
    token = CancellationToken()
    token.cancel_after(5.0)

    try:
        response = await token.guard(client.get(url))
    except OperationCancelledError as e:
        print(e.reason)   # "deadline exceeded"
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")

CANCELLED = "cancelled"
DEADLINE_EXCEEDED = "deadline exceeded"


class OperationCancelledError(Exception):
    """Raised by CancellationToken.guard() when the token fires first."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class CancellationToken:
    """One-shot cancellation signal shared between an owner and its workers."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Why the token fired, None while still active."""
        return self._reason

    def cancel(self, reason: str = CANCELLED) -> None:
        """Fire the token. Later calls keep the first reason."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def cancel_after(self, delay: float) -> None:
        """Fire the token with DEADLINE_EXCEEDED after delay seconds."""
        if self._event.is_set():
            return
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self.cancel, DEADLINE_EXCEEDED)

    async def wait(self) -> str:
        """Wait until the token fires; returns the reason."""
        await self._event.wait()
        return self._reason or CANCELLED

    async def guard(self, aw: Awaitable[T]) -> T:
        """
        Await aw unless the token fires first.

        When the token wins, the work is cancelled and awaited before
        OperationCancelledError is raised, so nothing keeps running behind
        the caller's back. A token that already fired raises immediately
        without starting the work.

        Raises:
            OperationCancelledError: token fired before aw completed
        """
        if self.cancelled:
            if asyncio.iscoroutine(aw):
                aw.close()
            raise OperationCancelledError(self._reason or CANCELLED)

        work = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await work
            raise
        finally:
            waiter.cancel()

        if work in done:
            return work.result()

        work.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await work
        raise OperationCancelledError(self._reason or CANCELLED)
