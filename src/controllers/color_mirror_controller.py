"""
ColorMirrorController - shows received colors on the LED strip

Consumes the color queue filled by ColorStream and fills the configured pixel
window with each color; pixels outside the window stay off.
"""

from __future__ import annotations

import asyncio

from hardware.led.strip_interface import ILEDSink, LEDWriteError
from models.color import Color
from models.config import PixelWindow
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.COLOR)


def render_window(color: Color, window: PixelWindow) -> bytes:
    """
    Build a solid-fill frame: color inside [first_pixel, last_pixel), black elsewhere.

    Returns:
        3 * led_count bytes (R, G, B per pixel, alpha dropped)
    """
    frame = bytearray(window.led_count * 3)
    lit = window.last_pixel - window.first_pixel
    frame[window.first_pixel * 3:window.last_pixel * 3] = bytes(color.to_rgb()) * lit
    return bytes(frame)


class ColorMirrorController:
    """
    Mirrors colors onto an LED sink.

    Usage:
        controller = ColorMirrorController(strip, window)
        controller.set_color(Color.white())      # startup check
        await controller.run(queue)              # until cancelled
    """

    def __init__(self, sink: ILEDSink, window: PixelWindow):
        self.sink = sink
        self.window = window
        self.colors_shown = 0

    def set_color(self, color: Color) -> int:
        """
        Fill the window with color.

        Raises:
            LEDWriteError: sink rejected the frame
        """
        return self.sink.write(render_window(color, self.window))

    async def run(self, colors: asyncio.Queue[Color]) -> None:
        """Show every color from the queue until the task is cancelled."""
        try:
            while True:
                color = await colors.get()
                log.info("Received color", color=color)
                try:
                    self.set_color(color)
                    self.colors_shown += 1
                except LEDWriteError as e:
                    log.error(f"set leds: {e}")
                finally:
                    colors.task_done()
        except asyncio.CancelledError:
            log.debug("Color mirror loop cancelled")
            raise
