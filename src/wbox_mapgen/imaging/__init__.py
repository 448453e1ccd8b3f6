"""Image decoding and palette previews (Pillow)."""

from .loader import PixelGrid, load_pixel_grid
from .preview import render_preview, save_preview

__all__ = [
    "PixelGrid",
    "load_pixel_grid",
    "render_preview",
    "save_preview",
]
