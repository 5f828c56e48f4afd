# hardware/led/strip_factory.py

from models.config import LEDStripConfig
from runtime.runtime_info import RuntimeInfo
from hardware.led.strip_interface import ILEDSink
from hardware.led.virtual_strip import VirtualStrip
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


def create_strip(config: LEDStripConfig) -> ILEDSink:
    """
    Build the LED sink for config.

    Uses rpi_ws281x on a Raspberry Pi where it is installed; anywhere else
    (PC / WSL / CI), or when the config asks for VIRTUAL, returns a
    VirtualStrip so the rest of the app still runs.
    """
    if config.is_virtual:
        log.info("Using virtual LED strip", count=config.led_count)
        return VirtualStrip(config.led_count, brightness=config.intensity)

    if RuntimeInfo.is_raspberry_pi() and RuntimeInfo.has_ws281x():
        from hardware.led.ws281x_strip import WS281xStrip
        return WS281xStrip(config)

    log.warn(
        "rpi_ws281x not available, falling back to virtual LED strip",
        type=config.type.value,
        count=config.led_count,
    )
    return VirtualStrip(config.led_count, brightness=config.intensity)
