from __future__ import annotations

from typing import TYPE_CHECKING

from hardware.led.strip_interface import LEDWriteError
from lifecycle.shutdown_protocol import IShutdownHandler
from models.color import Color
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from controllers.color_mirror_controller import ColorMirrorController

log = get_logger().for_category(LogCategory.SHUTDOWN)


class LEDShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for LED hardware.

    Sets the strip to black so it is not left showing the last color.
    Runs AFTER the color stream and mirror loop stop, so no late color
    can overwrite the black frame.

    Priority: 100
    """

    def __init__(self, controller: ColorMirrorController):
        self.controller = controller

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Setting LEDs to black...")
        try:
            self.controller.set_color(Color.black())
        except LEDWriteError as e:
            log.error(f"set leds to black: {e}")
            raise
        log.info("LEDs off")
