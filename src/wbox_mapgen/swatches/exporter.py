"""
Color swatch export for image editors.

Swatch files are a pure function of the palette: one named swatch per entry,
in declaration order. Two formats are supported:

ASE (Adobe Swatch Exchange), big-endian:
    b"ASEF"                      signature
    uint16 1, uint16 0           version 1.0
    uint32 N                     block count
    N color blocks:
        uint16 0x0001            block type (color entry)
        uint32 length            bytes that follow in this block
        uint16 name_len          UTF-16 code units incl. terminator
        name                     UTF-16BE + b"\\x00\\x00"
        b"RGB "                  color model
        float32 r, g, b          channel / 255
        uint16 2                 color type (normal)

GPL (GIMP palette), UTF-8 text with LF endings:
    GIMP Palette
    Name: <name>
    Columns: 0
    #
    <r> <g> <b>\\t<terrain_id>   one line per entry, channels right-aligned to 3
"""

import logging
import struct
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from ..palette.table import PaletteTable
from ..utils.atomic_write import atomic_write_bytes

ASE_SIGNATURE = b"ASEF"
ASE_VERSION = (1, 0)
ASE_BLOCK_COLOR = 0x0001
ASE_MODEL_RGB = b"RGB "
ASE_COLOR_NORMAL = 2


class SwatchFormat(Enum):
    """Supported swatch file formats."""

    ASE = "ase"
    GPL = "gpl"

    @classmethod
    def for_path(cls, path: Union[str, Path]) -> "SwatchFormat":
        """Pick the format from the file suffix (ASE unless '.gpl')."""
        if Path(path).suffix.lower() == ".gpl":
            return cls.GPL
        return cls.ASE


def encode_ase(palette: PaletteTable) -> bytes:
    """Encode the palette as an Adobe Swatch Exchange file."""
    blocks: List[bytes] = []
    for entry in palette.entries:
        name = entry.terrain_id.encode("utf-16-be") + b"\x00\x00"
        name_units = len(name) // 2
        r, g, b = (channel / 255.0 for channel in entry.color)
        body = (
            struct.pack(">H", name_units)
            + name
            + ASE_MODEL_RGB
            + struct.pack(">fff", r, g, b)
            + struct.pack(">H", ASE_COLOR_NORMAL)
        )
        blocks.append(struct.pack(">HI", ASE_BLOCK_COLOR, len(body)) + body)

    header = ASE_SIGNATURE + struct.pack(">HHI", *ASE_VERSION, len(blocks))
    return header + b"".join(blocks)


def encode_gpl(palette: PaletteTable, name: str = "wbox-mapgen") -> bytes:
    """Encode the palette as a GIMP .gpl palette."""
    lines = ["GIMP Palette", f"Name: {name}", "Columns: 0", "#"]
    for entry in palette.entries:
        r, g, b = entry.color
        lines.append(f"{r:3d} {g:3d} {b:3d}\t{entry.terrain_id}")
    return ("\n".join(lines) + "\n").encode("utf-8")


class SwatchExporter:
    """Writes swatch tables derived from a palette."""

    def __init__(self, swatch_format: Optional[SwatchFormat] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.swatch_format = swatch_format

    def encode(self, palette: PaletteTable, swatch_format: SwatchFormat = SwatchFormat.ASE, name: str = "wbox-mapgen") -> bytes:
        if swatch_format is SwatchFormat.GPL:
            return encode_gpl(palette, name)
        return encode_ase(palette)

    def export(self, palette: PaletteTable, destination: Union[str, Path]) -> Path:
        """Write the palette's swatch table.

        Raises:
            MapWriteError: If the destination cannot be written
        """
        path = Path(destination)
        swatch_format = self.swatch_format or SwatchFormat.for_path(path)
        name = Path(palette.source).stem if palette.source else "wbox-mapgen"
        data = self.encode(palette, swatch_format, name=name)
        atomic_write_bytes(path, data)
        self.logger.info(
            f"Exported {len(palette)} swatch(es) to {path} ({swatch_format.value.upper()})"
        )
        return path
