"""
Freeze mask: pure white pixels of a secondary image mark frozen cells.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import DimensionMismatchError
from ..imaging.loader import PixelGrid, load_pixel_grid
from ..palette.models import WHITE


class FreezeMask:
    """Boolean grid aligned with the primary image.

    Only exact (255, 255, 255) counts as frozen; no palette or tolerance is
    applied. An empty mask (no source) reports every cell unfrozen.
    """

    def __init__(self, width: int, height: int, cells: Optional[bytes] = None, source: Optional[str] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.width = width
        self.height = height
        self.source = source
        # None means "no freeze source", every cell is unfrozen
        self._cells = cells
        if cells is not None and len(cells) != width * height:
            raise ValueError(f"Mask needs {width * height} cells, got {len(cells)}")

    @classmethod
    def empty(cls, width: int, height: int) -> "FreezeMask":
        return cls(width, height)

    @classmethod
    def from_grid(
        cls,
        grid: PixelGrid,
        expected_width: int,
        expected_height: int,
        source: Optional[str] = None,
    ) -> "FreezeMask":
        """Build a mask from decoded pixels.

        Raises:
            DimensionMismatchError: If the grid size differs from the expected size
        """
        if (grid.width, grid.height) != (expected_width, expected_height):
            raise DimensionMismatchError(
                (expected_width, expected_height), (grid.width, grid.height), source
            )
        cells = bytes(1 if pixel == WHITE else 0 for pixel in grid.pixels)
        return cls(expected_width, expected_height, cells, source)

    @classmethod
    def load(
        cls,
        source: Optional[Union[str, Path, PixelGrid]],
        expected_width: int,
        expected_height: int,
    ) -> "FreezeMask":
        """Load a freeze image and align it to the primary image.

        Args:
            source: Image path, an already decoded PixelGrid, or None for no mask
            expected_width: Width of the primary image
            expected_height: Height of the primary image

        Raises:
            DimensionMismatchError: If the freeze image size differs at all
            ImageLoadError: If the freeze image cannot be decoded
        """
        if source is None:
            return cls.empty(expected_width, expected_height)

        if isinstance(source, PixelGrid):
            mask = cls.from_grid(source, expected_width, expected_height)
        else:
            grid = load_pixel_grid(source)
            mask = cls.from_grid(grid, expected_width, expected_height, str(source))

        mask.logger.info(f"Freeze map loaded: {mask.frozen_count} frozen tile(s)")
        return mask

    # === QUERIES ===

    @property
    def has_source(self) -> bool:
        return self._cells is not None

    @property
    def frozen_count(self) -> int:
        if self._cells is None:
            return 0
        return self._cells.count(1)

    def is_frozen(self, x: int, y: int) -> bool:
        if self._cells is None:
            return False
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} mask")
        return self._cells[y * self.width + x] == 1
