"""Swatch tables exported from palettes."""

from .exporter import SwatchExporter, SwatchFormat, encode_ase, encode_gpl

__all__ = [
    "SwatchExporter",
    "SwatchFormat",
    "encode_ase",
    "encode_gpl",
]
