"""
Enums shared across the color mirror application
"""

from enum import Enum, auto


class LEDStripType(Enum):
    """Physical LED strip type (enum values mirror the names used in config.yaml)."""
    WS2811_12V = "WS2811_12V"
    WS2812_5V = "WS2812_5V"
    WS2813 = "WS2813"
    SK6812 = "SK6812"
    VIRTUAL = "VIRTUAL"       # In-memory strip, no hardware


class ColorChannel(Enum):
    """RGB channels in wire order (#RRGGBB)"""
    RED = 0
    GREEN = 1
    BLUE = 2


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # LED strip drivers
    COLOR = auto()       # Colors received and rendered
    STREAM = auto()      # DisplayCAL polling and reconnects
    SYSTEM = auto()      # Startup, shutdown, errors

    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
