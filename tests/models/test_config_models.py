"""
Unit tests for configuration models and their validation
"""

import pytest

from models.config import ConfigError, LEDStripConfig, PixelWindow, WebConfig
from models.enums import LEDStripType


# ============================================================
#  PixelWindow
# ============================================================

def test_window_minus_one_means_whole_strip():
    window = PixelWindow.resolve(30)

    assert (window.first_pixel, window.last_pixel) == (0, 30)


def test_window_explicit_range():
    window = PixelWindow.resolve(30, first_pixel=5, last_pixel=10)

    assert (window.led_count, window.first_pixel, window.last_pixel) == (30, 5, 10)


@pytest.mark.parametrize("count, first, last, message", [
    (10, 0, 11, "greater than the number of pixels"),
    (10, 0, -2, "last_pixel must be >= 0"),
    (10, -1, 5, "first_pixel must be >= 0"),
    (10, 6, 5, "out of range"),
    (0, 0, -1, "count must be >= 1"),
])
def test_window_validation(count, first, last, message):
    with pytest.raises(ConfigError, match=message):
        PixelWindow.resolve(count, first_pixel=first, last_pixel=last)


# ============================================================
#  LEDStripConfig
# ============================================================

@pytest.mark.parametrize("intensity", [-1, 256])
def test_strip_intensity_range(intensity):
    with pytest.raises(ConfigError, match="intensity"):
        LEDStripConfig(type=LEDStripType.WS2812_5V, window=PixelWindow.resolve(1), intensity=intensity)


def test_strip_color_order_checked():
    with pytest.raises(ConfigError, match="color order"):
        LEDStripConfig(type=LEDStripType.WS2812_5V, window=PixelWindow.resolve(1), color_order="RGBW")


def test_strip_properties():
    config = LEDStripConfig(type=LEDStripType.VIRTUAL, window=PixelWindow.resolve(8), intensity=0)

    assert config.led_count == 8
    assert config.is_virtual
    assert config.as_dict()["type"] == "VIRTUAL"


# ============================================================
#  WebConfig
# ============================================================

def test_web_defaults():
    web = WebConfig()

    assert web.url == "http://localhost:8080"
    assert web.request_timeout is None
    assert web.queue_size == 1


@pytest.mark.parametrize("kwargs", [
    {"url": "localhost:8080"},
    {"url": "ftp://host"},
    {"request_timeout": 0},
    {"reconnect_delay": -1},
    {"stop_timeout": -0.5},
    {"queue_size": 0},
])
def test_web_validation(kwargs):
    with pytest.raises(ConfigError):
        WebConfig(**kwargs)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
