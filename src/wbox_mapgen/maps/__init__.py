"""Map models, assembly and container encoding."""

from .models import RESERVED_KEYS, MapDocument, Tile
from .template import MapTemplate
from .freeze_mask import FreezeMask
from .assembler import MapAssembler
from .game_schema import GAME_KEYS, game_fields
from .serializer import MapSerializer, read_map

__all__ = [
    "RESERVED_KEYS",
    "MapDocument",
    "Tile",
    "MapTemplate",
    "FreezeMask",
    "MapAssembler",
    "MapSerializer",
    "GAME_KEYS",
    "game_fields",
    "read_map",
]
