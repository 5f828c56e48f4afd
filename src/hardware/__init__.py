"""
Hardware Layer

Low-level LED strip output only:

- ILEDSink protocol and LEDWriteError
- WS281xStrip (rpi_ws281x, imported lazily by create_strip)
- VirtualStrip for machines without the hardware
"""
from .led.strip_interface import ILEDSink, LEDWriteError
from .led.virtual_strip import VirtualStrip
from .led.strip_factory import create_strip

__all__ = [
    "ILEDSink",
    "LEDWriteError",
    "VirtualStrip",
    "create_strip",
]
