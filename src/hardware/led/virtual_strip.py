from __future__ import annotations
from typing import List, Tuple

from hardware.led.strip_interface import ILEDSink


class VirtualStrip(ILEDSink):
    """In-memory strip: keeps the last frame instead of driving hardware."""

    def __init__(
        self,
        pixel_count: int,
        brightness: int = 255
    ):
        self.pixel_count = pixel_count
        self.brightness = brightness
        self._buffer = bytearray(pixel_count * 3)
        self.writes = 0

    @property
    def led_count(self) -> int:
        return self.pixel_count

    def write(self, pixels: bytes) -> int:
        length = min(len(pixels), len(self._buffer))
        self._buffer[:length] = pixels[:length]
        self._buffer[length:] = bytes(len(self._buffer) - length)
        self.writes += 1
        return length

    def get_frame(self) -> bytes:
        return bytes(self._buffer)

    def get_pixel(self, index: int) -> Tuple[int, int, int]:
        if 0 <= index < self.led_count:
            r, g, b = self._buffer[index * 3:index * 3 + 3]
            return r, g, b
        return 0, 0, 0

    def get_pixels(self) -> List[Tuple[int, int, int]]:
        return [self.get_pixel(i) for i in range(self.led_count)]

    def clear(self) -> None:
        self._buffer = bytearray(self.led_count * 3)
