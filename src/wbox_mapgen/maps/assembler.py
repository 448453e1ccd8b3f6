"""
Map assembler: builds the canonical MapDocument from a pixel grid.

Tiles are resolved per row range. With more than one worker the ranges run
on a thread pool; each range writes into its own fixed slots of a
preallocated list, so the output order never depends on completion order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Tuple

from ..errors import (
    AssemblyError,
    DimensionMismatchError,
    ReservedKeyCollisionError,
    UnmappedColorError,
    UnmappedPixelError,
)
from ..imaging.loader import PixelGrid
from ..laws.law_set import WorldLawSet
from ..palette.models import RGB8
from ..palette.table import PaletteTable
from .freeze_mask import FreezeMask
from .models import RESERVED_KEYS, MapDocument, Tile
from .template import MapTemplate


class MapAssembler:
    """Turns pixels plus palette, freeze mask, laws and template into a map."""

    def __init__(self, workers: int = 1, rows_per_chunk: int = 64):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if rows_per_chunk < 1:
            raise ValueError(f"rows_per_chunk must be >= 1, got {rows_per_chunk}")
        self.workers = workers
        self.rows_per_chunk = rows_per_chunk

    def assemble(
        self,
        pixels: PixelGrid,
        palette: PaletteTable,
        freeze: Optional[FreezeMask] = None,
        laws: Optional[WorldLawSet] = None,
        template: Optional[MapTemplate] = None,
    ) -> MapDocument:
        """Build the map document.

        Args:
            pixels: Primary image pixels
            palette: Palette used to resolve every pixel
            freeze: Freeze mask aligned with the image (None: nothing frozen)
            laws: World laws (None: built-in defaults)
            template: Map data merged verbatim (None: empty)

        Returns:
            Immutable MapDocument

        Raises:
            ReservedKeyCollisionError: If the template declares an assembler-owned key
            DimensionMismatchError: If the freeze mask is not the image size
            UnmappedPixelError: For the first unresolvable pixel in row-major order
        """
        width, height = pixels.width, pixels.height
        template = template if template is not None else MapTemplate.empty()
        laws = laws if laws is not None else WorldLawSet()
        freeze = freeze if freeze is not None else FreezeMask.empty(width, height)

        collisions = template.reserved_collisions(RESERVED_KEYS)
        if collisions:
            raise ReservedKeyCollisionError(collisions[0])

        if (freeze.width, freeze.height) != (width, height):
            raise DimensionMismatchError((width, height), (freeze.width, freeze.height), freeze.source)

        slots: List[Optional[Tile]] = [None] * (width * height)
        ranges = [
            (start, min(start + self.rows_per_chunk, height))
            for start in range(0, height, self.rows_per_chunk)
        ]

        if self.workers == 1 or len(ranges) <= 1:
            for row_range in ranges:
                error = self._resolve_rows(pixels, palette, freeze, row_range, slots)
                if error is not None:
                    raise error
        else:
            self._resolve_parallel(pixels, palette, freeze, ranges, slots)

        tiles: Tuple[Tile, ...] = tuple(slots)  # type: ignore[arg-type]
        document = MapDocument(
            width=width,
            height=height,
            tiles=tiles,
            laws=laws.as_mapping(),
            template_overlay=template,
        )
        self.logger.info(
            f"Assembled {width}x{height} map: {len(tiles)} tiles, "
            f"{len(document.terrain_ids())} terrain type(s), {document.frozen_count} frozen"
        )
        return document

    def _resolve_parallel(
        self,
        pixels: PixelGrid,
        palette: PaletteTable,
        freeze: FreezeMask,
        ranges: List[Tuple[int, int]],
        slots: List[Optional[Tile]],
    ) -> None:
        errors: Dict[int, AssemblyError] = {}

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            future_to_range = {
                executor.submit(self._resolve_rows, pixels, palette, freeze, row_range, slots): row_range
                for row_range in ranges
            }
            for future in as_completed(future_to_range):
                row_range = future_to_range[future]
                error = future.result()
                if error is not None:
                    errors[row_range[0]] = error

        if errors:
            # Report the first failure in row-major order, whatever finished first
            raise errors[min(errors)]

    @staticmethod
    def _resolve_rows(
        pixels: PixelGrid,
        palette: PaletteTable,
        freeze: FreezeMask,
        row_range: Tuple[int, int],
        slots: List[Optional[Tile]],
    ) -> Optional[UnmappedPixelError]:
        """Resolve rows [start, stop) into their slots.

        Returns the first unresolvable pixel error instead of raising so the
        caller can order failures across ranges.
        """
        width = pixels.width
        cache: Dict[RGB8, str] = {}
        start, stop = row_range

        for y in range(start, stop):
            base = y * width
            for x in range(width):
                color = pixels.pixels[base + x]
                terrain_id = cache.get(color)
                if terrain_id is None:
                    try:
                        terrain_id = palette.resolve(color)
                    except UnmappedColorError:
                        return UnmappedPixelError(x, y, color)
                    cache[color] = terrain_id
                slots[base + x] = Tile(x, y, terrain_id, freeze.is_frozen(x, y))

        return None
