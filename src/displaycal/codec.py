"""
DisplayCAL web protocol codec.

DisplayCAL's web interface answers GET /ajax/messages with the color it wants
displayed, as "#RRGGBB". The query string echoes the color the client currently
shows plus a random number that only defeats caching.

Pure functions, no I/O.
"""

import random
import re
from urllib.parse import quote, urlsplit, urlunsplit

from displaycal.errors import BodyTooShortError, InvalidChannelError, MissingMarkerError
from models.color import Color
from models.enums import ColorChannel

MESSAGES_PATH = "/ajax/messages"

# Placeholder for the first request, distinct from any "real" default color
INITIAL_COLOR = Color(1, 2, 3)

COLOR_BODY_LENGTH = 7

# Path-segment escaping: space becomes %20 (not +); parentheses, commas and semicolons are escaped
_QUERY_SAFE = "$&+:=@"

_HEX_PAIR = re.compile(rb"[0-9A-Fa-f]{2}")


def build_locator(base: str, last_color: Color) -> str:
    """
    Build the polling URL for the next color.

    Args:
        base: DisplayCAL web interface address (e.g. "http://localhost:8080")
        last_color: Color most recently received (INITIAL_COLOR on first call)

    Returns:
        URL string: <base>/ajax/messages?rgb%28R%2C%20G%2C%20B%29%20<token>
    """
    parts = urlsplit(base)
    token = random.random()
    query = quote(f"rgb({last_color.r}, {last_color.g}, {last_color.b}) {token!r}", safe=_QUERY_SAFE)
    return urlunsplit((parts.scheme, parts.netloc, MESSAGES_PATH, query, parts.fragment))


def parse_color(body: bytes) -> Color:
    """
    Parse a DisplayCAL response body into a Color.

    The body must start with "#RRGGBB" (hex digits in any case). Anything
    after the 7th byte is ignored.

    Raises:
        BodyTooShortError: fewer than 7 bytes
        MissingMarkerError: first byte is not '#'
        InvalidChannelError: a two-digit group is not hex (channel names which)
    """
    if len(body) < COLOR_BODY_LENGTH:
        raise BodyTooShortError(
            f"too short: got {body!r} (len {len(body)}), want {COLOR_BODY_LENGTH} bytes", body
        )

    if body[:1] != b"#":
        raise MissingMarkerError(f"bad format: expected first byte to be #, got {body!r}", body)

    values = []
    for channel in ColorChannel:
        start = 1 + channel.value * 2
        pair = body[start:start + 2]
        if not _HEX_PAIR.fullmatch(pair):
            name = channel.name.lower()
            raise InvalidChannelError(
                f"{name} component of {body!r}: invalid hex {pair!r}", body, name
            )
        values.append(int(pair, 16))

    return Color.from_rgb(*values)
