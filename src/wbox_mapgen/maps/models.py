"""
Data models for assembled maps.

Tiles and the canonical MapDocument are immutable: the assembler builds a
document once and the serializer only reads it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, List, Mapping, Tuple

from .template import MapTemplate

RESERVED_KEYS: Tuple[str, ...] = ("width", "height", "tiles", "laws")
"""Top-level keys owned by the assembler; a template must not declare them."""


@dataclass(frozen=True)
class Tile:
    """One map cell, matching one input pixel.

    Attributes:
        x: Column, 0 at the left
        y: Row, 0 at the top
        terrain_id: Resolved terrain
        frozen: True if the freeze mask marks this cell
    """

    x: int
    y: int
    terrain_id: str
    frozen: bool = False


@dataclass(frozen=True)
class MapDocument:
    """Canonical in-memory map.

    Invariants (checked by ``validate``):
        - len(tiles) == width * height
        - tiles[y * width + x] has coordinates (x, y)
        - laws covers exactly the expected law names
    """

    width: int
    height: int
    tiles: Tuple[Tile, ...]
    laws: Mapping[str, bool] = field(default_factory=lambda: MappingProxyType({}))
    template_overlay: MapTemplate = field(default_factory=MapTemplate.empty)

    @property
    def tile_count(self) -> int:
        return len(self.tiles)

    @property
    def frozen_count(self) -> int:
        return sum(1 for tile in self.tiles if tile.frozen)

    def tile_at(self, x: int, y: int) -> Tile:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} map")
        return self.tiles[y * self.width + x]

    def frozen_indices(self) -> List[int]:
        """Row-major indices of frozen tiles."""
        return [index for index, tile in enumerate(self.tiles) if tile.frozen]

    def terrain_ids(self) -> List[str]:
        """Distinct terrain ids in first-seen row-major order."""
        return list(dict.fromkeys(tile.terrain_id for tile in self.tiles))

    def validate(self, expected_laws: FrozenSet[str]) -> List[str]:
        """Check the document invariants.

        Args:
            expected_laws: Law names the document must carry

        Returns:
            List of violations (empty if valid)
        """
        errors: List[str] = []

        if self.width < 0 or self.height < 0:
            errors.append(f"negative dimensions {self.width}x{self.height}")
            return errors

        expected = self.width * self.height
        if len(self.tiles) != expected:
            errors.append(
                f"{len(self.tiles)} tiles for a {self.width}x{self.height} map, expected {expected}"
            )
            return errors

        for index, tile in enumerate(self.tiles):
            y, x = divmod(index, self.width)
            if (tile.x, tile.y) != (x, y):
                errors.append(f"tile {index} has coordinates ({tile.x}, {tile.y}), expected ({x}, {y})")
                break
            if not isinstance(tile.terrain_id, str) or not tile.terrain_id:
                errors.append(f"tile ({x}, {y}) has no terrain id")
                break

        law_names = frozenset(self.laws)
        if law_names != expected_laws:
            missing = sorted(expected_laws - law_names)
            extra = sorted(law_names - expected_laws)
            if missing:
                errors.append(f"missing laws: {missing}")
            if extra:
                errors.append(f"unknown laws: {extra}")

        collisions = self.template_overlay.reserved_collisions(RESERVED_KEYS)
        if collisions:
            errors.append(f"template overlay declares reserved keys: {collisions}")

        return errors


def tile_payload(tile: Tile) -> Mapping[str, Any]:
    """Serializable form of a tile (coordinates are implicit from position)."""
    return {"terrain_id": tile.terrain_id, "frozen": tile.frozen}
