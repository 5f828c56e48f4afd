from .strip_interface import ILEDSink, LEDWriteError
from .virtual_strip import VirtualStrip
from .strip_factory import create_strip

__all__ = [
    "ILEDSink",
    "LEDWriteError",
    "VirtualStrip",
    "create_strip",
]
