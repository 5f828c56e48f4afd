"""
Errors raised while streaming colors from the DisplayCAL web interface.

    ColorStreamError
    ├── DecodeError              malformed response body
    │   ├── BodyTooShortError
    │   ├── MissingMarkerError
    │   ├── InvalidChannelError
    │   └── ResponseDecodeError  decode failure seen by the stream (has locator)
    ├── TransportError           request, connection or HTTP status failure
    └── StreamCancelled          the cancellation token fired

Callers retry everything except StreamCancelled.
"""

from typing import Optional


class ColorStreamError(Exception):
    """Base class for all color stream failures."""
    pass


class DecodeError(ColorStreamError):
    """Response body is not a #RRGGBB color."""

    def __init__(self, message: str, body: bytes = b""):
        super().__init__(message)
        self.body = body


class BodyTooShortError(DecodeError):
    pass


class MissingMarkerError(DecodeError):
    pass


class InvalidChannelError(DecodeError):
    """One of the two-digit hex groups is not valid hexadecimal."""

    def __init__(self, message: str, body: bytes, channel: str):
        super().__init__(message, body)
        self.channel = channel


class ResponseDecodeError(DecodeError):
    """A polled response failed to decode; carries the request locator."""

    def __init__(self, locator: str, cause: DecodeError):
        super().__init__(f"request {locator!r}: parse color: {cause}", cause.body)
        self.locator = locator
        self.cause = cause


class TransportError(ColorStreamError):
    """Request could not be completed, or completed with a non-200 status."""

    def __init__(self, locator: str, message: str, status: Optional[int] = None):
        super().__init__(f"request {locator!r}: {message}")
        self.locator = locator
        self.status = status


class StreamCancelled(ColorStreamError):
    """
    Stream stopped because its cancellation token fired.

    Attributes:
        step: Blocking step that observed the cancellation
        reason: Token reason ("cancelled" or "deadline exceeded")
    """

    def __init__(self, step: str, reason: str):
        super().__init__(f"{step}: {reason}")
        self.step = step
        self.reason = reason
