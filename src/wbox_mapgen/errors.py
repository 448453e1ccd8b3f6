"""
Exception hierarchy for wbox-mapgen.

Every failure that aborts a conversion derives from MapConversionError so the
command line entry point can report it with a single clear message.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

RGB = Tuple[int, int, int]


def format_color(color: RGB) -> str:
    """Render an RGB triple as #RRGGBB."""
    r, g, b = color
    return f"#{r:02X}{g:02X}{b:02X}"


class MapConversionError(Exception):
    """Base class for all conversion failures."""
    pass


class LoadError(MapConversionError):
    """Raised when an input file cannot be read or parsed."""

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None):
        self.source = str(source) if source is not None else None
        if self.source:
            message = f"{self.source}: {message}"
        super().__init__(message)


class PaletteLoadError(LoadError):
    """Palette file is unreadable or invalid."""
    pass


class MalformedPaletteLineError(PaletteLoadError):
    """A palette line could not be parsed."""

    def __init__(self, source: Optional[Union[str, Path]], line_no: int, line: str, reason: str):
        self.line_no = line_no
        self.line = line
        super().__init__(f"line {line_no}: {reason}: {line.strip()!r}", source)


class DuplicateColorError(PaletteLoadError):
    """Two palette entries declare the same color."""

    def __init__(
        self,
        source: Optional[Union[str, Path]],
        color: RGB,
        line_no: int,
        first_line_no: int,
    ):
        self.color = color
        self.line_no = line_no
        self.first_line_no = first_line_no
        super().__init__(
            f"line {line_no}: color {format_color(color)} already declared on line {first_line_no}",
            source,
        )


class LawLoadError(LoadError):
    """World law file exists but cannot be read."""
    pass


class TemplateLoadError(LoadError):
    """Map data template is unreadable or not a JSON object."""
    pass


class ImageLoadError(LoadError):
    """Image file cannot be decoded."""
    pass


class DimensionMismatchError(MapConversionError):
    """Freeze mask size differs from the primary image."""

    def __init__(
        self,
        expected: Tuple[int, int],
        actual: Tuple[int, int],
        source: Optional[Union[str, Path]] = None,
    ):
        self.expected = expected
        self.actual = actual
        self.source = str(source) if source is not None else None
        where = f"{self.source}: " if self.source else ""
        super().__init__(
            f"{where}freeze map is {actual[0]}x{actual[1]}, "
            f"expected {expected[0]}x{expected[1]} to match the image"
        )


class UnmappedColorError(MapConversionError):
    """Color has no entry in a strict palette."""

    def __init__(self, color: RGB):
        self.color = color
        super().__init__(f"color {format_color(color)} is not in the palette")


class AssemblyError(MapConversionError):
    """Map document could not be assembled."""
    pass


class UnmappedPixelError(AssemblyError):
    """A pixel color could not be resolved to a terrain."""

    def __init__(self, x: int, y: int, color: RGB):
        self.x = x
        self.y = y
        self.color = color
        super().__init__(
            f"pixel ({x}, {y}) has color {format_color(color)} which is not in the palette"
        )


class ReservedKeyCollisionError(AssemblyError):
    """Map template declares a key owned by the assembler."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"map template must not define reserved key {key!r}")


class EncodingError(MapConversionError):
    """Map document violates an invariant and cannot be encoded."""
    pass


class MapWriteError(MapConversionError):
    """Output destination cannot be written."""

    def __init__(self, destination: Union[str, Path], reason: str):
        self.destination = str(destination)
        super().__init__(f"cannot write {self.destination}: {reason}")
