"""
Terrain palettes: color -> terrain rules loaded from text files.
"""

from .models import (
    RGB8,
    WHITE,
    PaletteEntry,
    ResolutionPolicy,
    distance_sq,
    parse_hex_color,
)
from .table import PaletteTable

__all__ = [
    "RGB8",
    "WHITE",
    "PaletteEntry",
    "ResolutionPolicy",
    "PaletteTable",
    "distance_sq",
    "parse_hex_color",
]
