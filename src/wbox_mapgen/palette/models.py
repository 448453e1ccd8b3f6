"""
Data models for terrain palettes.

Contains the palette entry dataclass, resolution policy and color helpers.
No file-system logic lives here.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, TypeAlias

RGB8: TypeAlias = Tuple[int, int, int]
"""A color as an (r, g, b) triple of ints in 0..255."""

WHITE: RGB8 = (255, 255, 255)

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


class ResolutionPolicy(Enum):
    """How colors missing from the palette are handled."""

    STRICT = "strict"
    """Unknown colors are an error."""

    NEAREST = "nearest"
    """Unknown colors take the closest palette entry in RGB space."""

    @classmethod
    def parse(cls, value: "str | ResolutionPolicy") -> "ResolutionPolicy":
        """Convert a policy name (case-insensitive) to the enum."""
        if isinstance(value, ResolutionPolicy):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown palette policy {value!r}, expected one of: {names}")


def parse_hex_color(text: str) -> Optional[RGB8]:
    """Parse '#RRGGBB' or 'RRGGBB'. Returns None if the text is not a color."""
    match = _HEX_COLOR.match(text.strip())
    if not match:
        return None
    value = int(match.group(1), 16)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def distance_sq(a: RGB8, b: RGB8) -> int:
    """Squared Euclidean distance between two colors."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db


@dataclass(frozen=True)
class PaletteEntry:
    """One color -> terrain rule.

    Attributes:
        color: Exact RGB color matched against image pixels
        terrain_id: Terrain identifier written to the map
        tags: Free-form labels attached to the rule
        order_index: Position among the palette's entries (0-based)
    """

    color: RGB8
    terrain_id: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    order_index: int = 0

    @property
    def hex(self) -> str:
        """Color as #RRGGBB."""
        return "#{:02X}{:02X}{:02X}".format(*self.color)
