# hardware/led/ws281x_strip.py
"""
WS281xStrip - rpi_ws281x hardware driver
==========================================
Concrete implementation of ILEDSink for WS281x chips.

Features:
- Color order remapping (RGB/GRB/BRG/...)
- Global brightness from the configured intensity (no per-pixel scaling)
- write() pushes the whole frame with a single show()
"""

from __future__ import annotations

from rpi_ws281x import PixelStrip, Color as WS281xColor, ws

from hardware.led.strip_interface import ILEDSink, LEDWriteError
from models.config import LEDStripConfig
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


# Color order channel mapping
COLOR_ORDER_MAP = {
    "RGB": (0, 1, 2),
    "RBG": (0, 2, 1),
    "GRB": (1, 0, 2),
    "GBR": (1, 2, 0),
    "BRG": (2, 0, 1),
    "BGR": (2, 1, 0),
}


class WS281xStrip(ILEDSink):
    """
    WS281x hardware driver using rpi_ws281x library.

    Color correction is left to the strip: the point of mirroring DisplayCAL
    is to measure the raw LED output, so bytes are passed through unchanged
    apart from channel order and the global brightness limit.
    """

    def __init__(self, config: LEDStripConfig) -> None:
        self.config = config
        # rpi_ws281x reorders channels itself when it knows the strip type
        self._order_map = COLOR_ORDER_MAP["RGB"]

        try:
            self._pixel_strip = PixelStrip(
                config.led_count,
                config.gpio,
                config.frequency_hz,
                config.dma_channel,
                config.invert,
                config.intensity,
                config.channel,
                self._decode_color_order(config.color_order),
            )
        except TypeError:
            # Older rpi_ws281x version without strip_type param
            self._order_map = COLOR_ORDER_MAP[config.color_order.upper()]
            self._pixel_strip = PixelStrip(
                config.led_count,
                config.gpio,
                config.frequency_hz,
                config.dma_channel,
                config.invert,
                config.intensity,
                config.channel,
            )

        self._pixel_strip.begin()
        self._use_rgb_helper = hasattr(self._pixel_strip, "setPixelColorRGB")

        log.info(
            "WS281xStrip initialized",
            gpio=config.gpio,
            count=config.led_count,
            order=config.color_order,
            intensity=config.intensity,
            dma=config.dma_channel,
        )

    # ==================== ILEDSink API ====================

    @property
    def led_count(self) -> int:
        return self.config.led_count

    def write(self, pixels: bytes) -> int:
        """
        Push a full frame (3 bytes per pixel, RGB) with a single show().

        Pixels beyond the end of the frame are turned off.
        """
        count = min(len(pixels) // 3, self.led_count)
        r_i, g_i, b_i = self._order_map

        try:
            for i in range(self.led_count):
                if i < count:
                    r, g, b = pixels[i * 3], pixels[i * 3 + 1], pixels[i * 3 + 2]
                else:
                    r = g = b = 0

                ordered = [0, 0, 0]
                ordered[r_i] = r
                ordered[g_i] = g
                ordered[b_i] = b
                self._set_pixel(i, *ordered)

            self._pixel_strip.show()
        except Exception as ex:
            raise LEDWriteError(f"WS281x GPIO {self.config.gpio}: {ex}") from ex

        return count * 3

    def clear(self) -> None:
        """Turn off all LEDs (black + show)."""
        try:
            for i in range(self.led_count):
                self._set_pixel(i, 0, 0, 0)
            self._pixel_strip.show()
        except Exception as ex:
            log.error("clear failed", error=str(ex))

    # ==================== Helpers ====================

    def _set_pixel(self, index: int, c0: int, c1: int, c2: int) -> None:
        if self._use_rgb_helper:
            self._pixel_strip.setPixelColorRGB(index, c0, c1, c2)
        else:
            self._pixel_strip.setPixelColor(index, WS281xColor(c0, c1, c2))

    @staticmethod
    def _decode_color_order(order: str) -> int:
        """Map color order string to rpi_ws281x constant."""
        mapping = {
            "RGB": ws.WS2811_STRIP_RGB,
            "RBG": ws.WS2811_STRIP_RBG,
            "GRB": ws.WS2811_STRIP_GRB,
            "GBR": ws.WS2811_STRIP_GBR,
            "BRG": ws.WS2811_STRIP_BRG,
            "BGR": ws.WS2811_STRIP_BGR,
        }
        return mapping.get(order.upper(), ws.WS2811_STRIP_GRB)
