"""
Map container encoding.

A .wbox container is a bare zlib stream wrapping one UTF-8 JSON object, the
same framing the game reads:

    {
      "width": <int>,
      "height": <int>,
      "tiles": [{"terrain_id": <str>, "frozen": <bool>}, ...],   # row-major
      "laws": {<law name>: <bool>, ...},                         # default-table order
      <template keys, in template order, values verbatim>
      <game keys not already placed: tileMap, tileArray, tileAmounts,
       worldLaws, frozen_tiles>
    }

Tile coordinates are implicit: tiles[i] is at (i % width, i // width).
The game keys are derived from the document (see game_schema); a template
that already has one keeps its position and gets the derived value.
With ``game_keys=False`` only the canonical keys and the template are written.
Identical documents always encode to identical bytes.
"""

import logging
import zlib
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

import orjson

from ..errors import EncodingError, LoadError
from ..laws.defaults import DEFAULT_WORLD_LAWS
from ..utils.atomic_write import atomic_write_bytes
from .game_schema import game_fields
from .models import MapDocument, tile_payload


class MapSerializer:
    """Encodes MapDocuments into the .wbox container."""

    def __init__(
        self,
        compression_level: int = 1,
        indent: bool = False,
        game_keys: bool = True,
        expected_laws: Optional[Mapping[str, bool]] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        if not 0 <= compression_level <= 9:
            raise ValueError(f"compression_level must be 0-9, got {compression_level}")
        self.compression_level = compression_level
        self.indent = indent
        self.game_keys = game_keys
        laws = expected_laws if expected_laws is not None else DEFAULT_WORLD_LAWS
        self.expected_laws: FrozenSet[str] = frozenset(laws)

    def to_payload(self, document: MapDocument) -> Dict[str, Any]:
        """Build the JSON object written inside the container."""
        payload: Dict[str, Any] = {
            "width": document.width,
            "height": document.height,
            "tiles": [tile_payload(tile) for tile in document.tiles],
            "laws": dict(document.laws),
        }
        derived = game_fields(document) if self.game_keys else {}
        for key, value in document.template_overlay.items():
            payload[key] = derived.pop(key) if key in derived else value
        payload.update(derived)
        return payload

    def encode(self, document: MapDocument) -> bytes:
        """Encode a document to container bytes.

        Raises:
            EncodingError: If the document violates its invariants or holds
                values that cannot be represented as JSON
        """
        problems = document.validate(self.expected_laws)
        if problems:
            raise EncodingError("map document is inconsistent: " + "; ".join(problems))

        options = orjson.OPT_INDENT_2 if self.indent else 0
        try:
            json_bytes = orjson.dumps(self.to_payload(document), option=options)
        except orjson.JSONEncodeError as e:
            raise EncodingError(f"map document cannot be encoded as JSON: {e}") from e

        return zlib.compress(json_bytes, self.compression_level)

    def write(self, document: MapDocument, destination: Union[str, Path]) -> Path:
        """Encode and atomically write a document.

        Raises:
            EncodingError: If the document cannot be encoded (nothing is written)
            MapWriteError: If the destination cannot be written
        """
        return self.write_encoded(self.encode(document), destination)

    def write_encoded(self, data: bytes, destination: Union[str, Path]) -> Path:
        """Atomically write bytes returned by ``encode``.

        Raises:
            MapWriteError: If the destination cannot be written
        """
        path = atomic_write_bytes(destination, data)
        self.logger.info(f"Map written to {path} ({len(data)} bytes)")
        return path


def read_map(source: Union[str, Path]) -> Dict[str, Any]:
    """Decode a .wbox container back to its JSON object.

    Raises:
        LoadError: If the file is unreadable or not a valid container
    """
    path = Path(source)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise LoadError(f"cannot read map: {e}", path) from e

    try:
        data = orjson.loads(zlib.decompress(raw))
    except (zlib.error, orjson.JSONDecodeError) as e:
        raise LoadError(f"not a valid map container: {e}", path) from e

    if not isinstance(data, dict):
        raise LoadError("map container root is not a JSON object", path)
    return data
