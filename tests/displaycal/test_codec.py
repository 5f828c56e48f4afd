"""
Tests for the DisplayCAL codec: locator building and #RRGGBB parsing
"""

from urllib.parse import unquote, urlsplit

import pytest

from displaycal.codec import INITIAL_COLOR, MESSAGES_PATH, build_locator, parse_color
from displaycal.errors import (
    BodyTooShortError,
    DecodeError,
    InvalidChannelError,
    MissingMarkerError,
)
from models.color import Color


# ============================================================
#  parse_color
# ============================================================

@pytest.mark.parametrize("body, expected", [
    (b"#000000", (0, 0, 0)),
    (b"#FFFFFF", (255, 255, 255)),
    (b"#ffffff", (255, 255, 255)),
    (b"#0Aa1F0", (10, 161, 240)),
    (b"#010203", (1, 2, 3)),
])
def test_parse_valid_colors(body, expected):
    color = parse_color(body)

    assert color.to_rgb() == expected
    assert color.a == 255


def test_parse_ignores_trailing_bytes():
    assert parse_color(b"#FF8000\n<html>") == Color(255, 128, 0)


@pytest.mark.parametrize("body", [b"", b"!FFFFFF", b"#f", b"#foobar", b"hello there"])
def test_parse_rejects_malformed_bodies(body):
    with pytest.raises(DecodeError):
        parse_color(body)


def test_parse_too_short():
    with pytest.raises(BodyTooShortError) as exc_info:
        parse_color(b"#f")

    assert "too short" in str(exc_info.value)
    assert "len 2" in str(exc_info.value)
    assert exc_info.value.body == b"#f"


def test_parse_missing_marker():
    with pytest.raises(MissingMarkerError) as exc_info:
        parse_color(b"!FFFFFF")

    assert "expected first byte to be #" in str(exc_info.value)


@pytest.mark.parametrize("body, channel", [
    (b"#foobar", "red"),
    (b"#00zz00", "green"),
    (b"#0000+1", "blue"),
    (b"# 10000", "red"),
    (b"#0_0000", "red"),
])
def test_parse_names_invalid_channel(body, channel):
    with pytest.raises(InvalidChannelError) as exc_info:
        parse_color(body)

    assert exc_info.value.channel == channel
    assert str(exc_info.value).startswith(f"{channel} component of")


# ============================================================
#  build_locator
# ============================================================

def test_locator_targets_messages_endpoint():
    locator = build_locator("http://localhost:8080", INITIAL_COLOR)
    parts = urlsplit(locator)

    assert parts.scheme == "http"
    assert parts.netloc == "localhost:8080"
    assert parts.path == MESSAGES_PATH


def test_locator_replaces_base_path():
    locator = build_locator("http://displaycal.local:8080/some/page", Color(0, 0, 0))

    assert urlsplit(locator).path == MESSAGES_PATH


def test_locator_echoes_last_color():
    locator = build_locator("http://localhost:8080", Color(10, 161, 240))
    query = urlsplit(locator).query

    assert query.startswith("rgb%2810%2C%20161%2C%20240%29%20")
    assert unquote(query).startswith("rgb(10, 161, 240) ")


def test_locator_escapes_commas_like_a_path_segment():
    query = urlsplit(build_locator("http://h:8080", Color(1, 2, 3))).query

    assert query.startswith("rgb%281%2C%202%2C%203%29%20")


def test_locator_query_has_no_raw_spaces_or_parentheses():
    query = urlsplit(build_locator("http://localhost:8080", INITIAL_COLOR)).query

    assert " " not in query
    assert "(" not in query and ")" not in query
    assert "," not in query


def test_locator_token_changes_between_calls():
    first = build_locator("http://localhost:8080", INITIAL_COLOR)
    second = build_locator("http://localhost:8080", INITIAL_COLOR)

    assert first != second


def test_locator_token_is_a_number():
    query = unquote(urlsplit(build_locator("http://localhost:8080", INITIAL_COLOR)).query)
    token = query.rsplit(" ", 1)[1]

    assert 0.0 <= float(token) < 1.0
