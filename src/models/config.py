"""
Configuration Models

Typed containers for config.yaml. ConfigManager parses the raw YAML dict
(after command-line overrides) into these and validates them.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional
from urllib.parse import urlsplit

from models.enums import LEDStripType


class ConfigError(ValueError):
    """Invalid configuration value."""
    pass


ColorOrder = Literal["RGB", "RBG", "GRB", "GBR", "BRG", "BGR"]


# ============================================================
#  DisplayCAL web interface
# ============================================================

@dataclass(frozen=True)
class WebConfig:
    """Where and how to poll DisplayCAL."""
    url: str = "http://localhost:8080"
    request_timeout: Optional[float] = None   # None = wait for DisplayCAL indefinitely
    reconnect_delay: float = 1.0
    stop_timeout: float = 1.0
    queue_size: int = 1

    def __post_init__(self):
        parts = urlsplit(self.url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(f"web.url must be an absolute http(s) URL, got {self.url!r}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigError(f"web.request_timeout must be > 0 or null ({self.request_timeout})")
        if self.reconnect_delay < 0:
            raise ConfigError(f"web.reconnect_delay must be >= 0 ({self.reconnect_delay})")
        if self.stop_timeout < 0:
            raise ConfigError(f"web.stop_timeout must be >= 0 ({self.stop_timeout})")
        if self.queue_size < 1:
            raise ConfigError(f"web.queue_size must be >= 1 ({self.queue_size})")


# ============================================================
#  LED strip
# ============================================================

@dataclass(frozen=True)
class PixelWindow:
    """Half-open pixel range [first_pixel, last_pixel) that shows the color."""
    led_count: int
    first_pixel: int
    last_pixel: int

    def __post_init__(self):
        if self.led_count < 1:
            raise ConfigError(f"led_strip.count must be >= 1 ({self.led_count})")
        if self.last_pixel > self.led_count:
            raise ConfigError(
                f"last_pixel is greater than the number of pixels ({self.last_pixel} > {self.led_count})"
            )
        if self.last_pixel < 0:
            raise ConfigError(f"last_pixel must be >= 0 ({self.last_pixel})")
        if self.first_pixel < 0:
            raise ConfigError(f"first_pixel must be >= 0 ({self.first_pixel})")
        if self.first_pixel > self.last_pixel:
            raise ConfigError(
                f"first_pixel and last_pixel out of range ({self.first_pixel} > {self.last_pixel})"
            )

    @classmethod
    def resolve(cls, led_count: int, first_pixel: int = 0, last_pixel: int = -1) -> 'PixelWindow':
        """Build a window, treating last_pixel == -1 as 'up to the end of the strip'."""
        if last_pixel == -1:
            last_pixel = led_count
        return cls(led_count=led_count, first_pixel=first_pixel, last_pixel=last_pixel)


@dataclass(frozen=True)
class LEDStripConfig:
    """Physical (or virtual) LED strip the color is mirrored onto."""
    type: LEDStripType
    window: PixelWindow
    gpio: int = 18
    intensity: int = 80          # upper bound on brightness, 0-255
    color_order: ColorOrder = "GRB"
    frequency_hz: int = 800_000
    dma_channel: int = 10
    invert: bool = False
    channel: int = 0             # PWM channel (0 or 1)

    def __post_init__(self):
        if not 0 <= self.intensity <= 255:
            raise ConfigError(f"intensity value {self.intensity} out of range 0-255")
        if self.color_order.upper() not in ("RGB", "RBG", "GRB", "GBR", "BRG", "BGR"):
            raise ConfigError(f"Unsupported color order: {self.color_order}")

    @property
    def led_count(self) -> int:
        return self.window.led_count

    @property
    def is_virtual(self) -> bool:
        return self.type == LEDStripType.VIRTUAL

    def as_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        return d


# ============================================================
#  Root
# ============================================================

@dataclass(frozen=True)
class AppConfig:
    web: WebConfig
    led_strip: LEDStripConfig
