"""
Models package - Data models for the color mirror
"""

from .enums import LEDStripType, ColorChannel, LogLevel, LogCategory
from .color import Color
from .config import AppConfig, ConfigError, LEDStripConfig, PixelWindow, WebConfig

__all__ = [
    'LEDStripType',
    'ColorChannel',
    'LogLevel',
    'LogCategory',
    'Color',
    'AppConfig',
    'ConfigError',
    'LEDStripConfig',
    'PixelWindow',
    'WebConfig',
]
