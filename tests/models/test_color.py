"""
Unit tests for Color class
"""

import pytest

from models.color import Color


def test_color_from_rgb_is_opaque():
    c = Color.from_rgb(255, 0, 0)

    assert c.to_rgb() == (255, 0, 0)
    assert c.a == 255


def test_black_and_white():
    assert Color.black() == Color(0, 0, 0, 255)
    assert Color.white() == Color(255, 255, 255, 255)


def test_to_hex():
    assert Color(10, 161, 240).to_hex() == "#0AA1F0"


def test_str_shows_hex_and_triple():
    assert str(Color(255, 128, 0)) == "#FF8000 (255, 128, 0)"


def test_color_is_immutable():
    c = Color.white()

    with pytest.raises(AttributeError):
        c.r = 0


@pytest.mark.parametrize("args", [(256, 0, 0), (0, -1, 0), (0, 0, 0, 300), (1.5, 0, 0)])
def test_color_rejects_out_of_range(args):
    with pytest.raises(ValueError):
        Color(*args)
