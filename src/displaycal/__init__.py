"""
DisplayCAL web interface client

Polls the color DisplayCAL wants displayed and streams it to a consumer.
"""

from .codec import INITIAL_COLOR, build_locator, parse_color
from .errors import (
    ColorStreamError,
    DecodeError,
    BodyTooShortError,
    MissingMarkerError,
    InvalidChannelError,
    ResponseDecodeError,
    TransportError,
    StreamCancelled,
)
from .stream import ColorStream

__all__ = [
    "INITIAL_COLOR",
    "build_locator",
    "parse_color",
    "ColorStreamError",
    "DecodeError",
    "BodyTooShortError",
    "MissingMarkerError",
    "InvalidChannelError",
    "ResponseDecodeError",
    "TransportError",
    "StreamCancelled",
    "ColorStream",
]
