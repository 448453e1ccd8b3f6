"""
wbox-mapgen: image to WorldBox map converter

Resolves every pixel of an image to a terrain through a color palette,
overlays an optional freeze map, merges world laws and a map data template,
and writes a .wbox map plus color swatches for image editors.
"""

__version__ = "0.1.0"
__author__ = "wbox-mapgen Contributors"

from .errors import MapConversionError
from .palette import PaletteEntry, PaletteTable, ResolutionPolicy
from .laws import DEFAULT_WORLD_LAWS, WorldLawSet
from .imaging import PixelGrid, load_pixel_grid
from .maps import (
    FreezeMask,
    MapAssembler,
    MapDocument,
    MapSerializer,
    MapTemplate,
    Tile,
    read_map,
)
from .swatches import SwatchExporter, SwatchFormat
from .pipeline import ConversionPipeline, ConversionRequest, ConversionResult

__all__ = [
    # Errors
    "MapConversionError",

    # Inputs
    "PaletteEntry",
    "PaletteTable",
    "ResolutionPolicy",
    "DEFAULT_WORLD_LAWS",
    "WorldLawSet",
    "PixelGrid",
    "load_pixel_grid",
    "FreezeMask",
    "MapTemplate",

    # Assembly and output
    "MapAssembler",
    "MapDocument",
    "Tile",
    "MapSerializer",
    "read_map",
    "SwatchExporter",
    "SwatchFormat",

    # Pipeline
    "ConversionPipeline",
    "ConversionRequest",
    "ConversionResult",
]
