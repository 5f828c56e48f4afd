"""
Color model - RGB value mirrored onto the LED strip

A Color is what DisplayCAL asks the display to show. Alpha exists only to keep a
uniform RGBA pixel shape; it is always fully opaque and never read from the wire.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Color:
    """
    Immutable RGBA color, 8 bits per channel

    Examples:
        color = Color.from_rgb(255, 128, 0)
        r, g, b = color.to_rgb()
        color.to_hex()        # '#FF8000'
        Color.black() == Color(0, 0, 0)
    """

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"Color.{name} must be an int in 0-255, got {value!r}")

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> 'Color':
        """Create an opaque color from RGB values (0-255)"""
        return cls(r, g, b)

    @classmethod
    def black(cls) -> 'Color':
        return cls(0, 0, 0)

    @classmethod
    def white(cls) -> 'Color':
        return cls(255, 255, 255)

    # === RENDERING ===

    def to_rgb(self) -> Tuple[int, int, int]:
        """RGB triple for hardware (alpha dropped)"""
        return self.r, self.g, self.b

    def to_hex(self) -> str:
        """Format as #RRGGBB, the same notation DisplayCAL sends"""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def __str__(self) -> str:
        return f"{self.to_hex()} ({self.r}, {self.g}, {self.b})"
