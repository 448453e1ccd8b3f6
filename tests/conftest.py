"""Shared fixtures for wbox-mapgen tests."""

from pathlib import Path
from typing import Callable, Sequence, Tuple

import pytest
from PIL import Image

RGB = Tuple[int, int, int]


@pytest.fixture
def write_image(tmp_path: Path) -> Callable[[str, Sequence[Sequence[RGB]]], Path]:
    """Write rows of RGB pixels as a PNG under tmp_path."""

    def _write(name: str, rows: Sequence[Sequence[RGB]], mode: str = "RGB") -> Path:
        height = len(rows)
        width = len(rows[0])
        image = Image.new("RGB", (width, height))
        for y, row in enumerate(rows):
            for x, color in enumerate(row):
                image.putpixel((x, y), color)
        if mode != "RGB":
            image = image.convert(mode)
        path = tmp_path / name
        image.save(path)
        return path

    return _write


@pytest.fixture
def write_text(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a UTF-8 text file under tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def basic_palette_file(write_text) -> Path:
    """Palette from the two-pixel grass/water example."""
    return write_text("palette.txt", "grass #008000\nwater #0000FF\n")


@pytest.fixture
def settings(tmp_path: Path):
    """AppSettings backed by a throwaway INI file."""
    from wbox_mapgen.settings import AppSettings

    return AppSettings(settings_file=tmp_path / "settings.ini")
