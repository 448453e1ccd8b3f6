"""
Palette preview: the input image with every pixel snapped to its palette color.

Useful to check what nearest-color resolution did before loading the map.
"""

import io
import logging
from pathlib import Path
from typing import Dict, Union

from PIL import Image

from ..palette.models import RGB8
from ..palette.table import PaletteTable
from ..utils.atomic_write import atomic_write_bytes
from .loader import PixelGrid

logger = logging.getLogger(__name__)


def render_preview(pixels: PixelGrid, palette: PaletteTable) -> Image.Image:
    """Return an RGB image with each pixel replaced by its resolved palette color.

    Raises:
        UnmappedColorError: If a color is missing from a strict palette
    """
    mapping: Dict[RGB8, RGB8] = {}
    for color in set(pixels.pixels):
        mapping[color] = palette.resolve_entry(color).color

    data = bytes(channel for color in pixels.pixels for channel in mapping[color])
    return Image.frombytes("RGB", (pixels.width, pixels.height), data)


def save_preview(pixels: PixelGrid, palette: PaletteTable, destination: Union[str, Path]) -> Path:
    """Render and atomically save a preview; format follows the file suffix."""
    path = Path(destination)
    image = render_preview(pixels, palette)

    buffer = io.BytesIO()
    image_format = Image.registered_extensions().get(path.suffix.lower(), "PNG")
    image.save(buffer, format=image_format)

    atomic_write_bytes(path, buffer.getvalue())
    logger.info(f"Preview saved to {path}")
    return path
