"""
Image decoding into plain pixel grids.

Pillow does the decoding; everything downstream only sees a PixelGrid.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple, Union

from PIL import Image, UnidentifiedImageError

from ..errors import ImageLoadError
from ..palette.models import RGB8

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelGrid:
    """Row-major RGB pixels, origin top-left.

    Attributes:
        width: Number of columns
        height: Number of rows
        pixels: width * height colors, row by row
    """

    width: int
    height: int
    pixels: Tuple[RGB8, ...]

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid grid size {self.width}x{self.height}")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Grid {self.width}x{self.height} needs {self.width * self.height} pixels, "
                f"got {len(self.pixels)}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def get(self, x: int, y: int) -> RGB8:
        return self.pixels[y * self.width + x]

    def row(self, y: int) -> Tuple[RGB8, ...]:
        start = y * self.width
        return self.pixels[start:start + self.width]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[RGB8]]) -> "PixelGrid":
        """Build a grid from a list of rows (all rows must be equally long)."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} pixels, expected {width}")
        pixels = tuple(
            (int(p[0]), int(p[1]), int(p[2])) for row in rows for p in row
        )
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelGrid":
        """Convert a Pillow image, dropping alpha."""
        rgb = image if image.mode == "RGB" else image.convert("RGB")
        data = rgb.tobytes()
        pixels = tuple(zip(data[0::3], data[1::3], data[2::3]))
        width, height = rgb.size
        return cls(width=width, height=height, pixels=pixels)


def load_pixel_grid(source: Union[str, Path]) -> PixelGrid:
    """Decode an image file into a PixelGrid.

    Raises:
        ImageLoadError: If the file is missing or not a readable image
    """
    path = Path(source)
    try:
        with Image.open(path) as image:
            grid = PixelGrid.from_image(image)
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise ImageLoadError(f"cannot decode image: {e}", path) from e

    logger.debug(f"Decoded {path.name}: {grid.width}x{grid.height}")
    return grid
