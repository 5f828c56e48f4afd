# hardware/led/strip_interface.py
"""
ILEDSink Protocol
=================
Hardware abstraction for LED strips.
Minimal contract for any physical driver (WS281x, APA102, etc).
"""

from __future__ import annotations
from typing import Protocol


class LEDWriteError(Exception):
    """Raised when a frame cannot be pushed to the strip."""
    pass


class ILEDSink(Protocol):
    """
    Protocol defining minimal LED strip hardware interface.

    All implementations must provide:
    - led_count: total pixels
    - write: push a full frame of raw RGB bytes
    - clear: turn off all LEDs
    """

    @property
    def led_count(self) -> int:
        """Total number of addressable pixels."""
        ...

    def write(self, pixels: bytes) -> int:
        """
        Push a frame to the hardware.

        Args:
            pixels: 3 bytes per pixel (R, G, B), no alpha. Shorter frames
                leave the remaining pixels off; extra bytes are ignored.

        Returns:
            Number of bytes written

        Raises:
            LEDWriteError: hardware refused the frame
        """
        ...

    def clear(self) -> None:
        """Turn off all LEDs."""
        ...
