"""End-to-end tests for the conversion pipeline."""

from pathlib import Path

import pytest
from PIL import Image

from wbox_mapgen.errors import (
    DimensionMismatchError,
    ImageLoadError,
    PaletteLoadError,
    UnmappedPixelError,
)
from wbox_mapgen.maps import read_map
from wbox_mapgen.palette import ResolutionPolicy
from wbox_mapgen.pipeline import ConversionPipeline, ConversionRequest, export_swatches

GREEN = (0, 128, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)


@pytest.fixture
def image_file(write_image) -> Path:
    return write_image("world.png", [[GREEN, BLUE]])


def make_request(image: Path, palette: Path, tmp_path: Path, **kwargs) -> ConversionRequest:
    return ConversionRequest(
        image_path=image,
        palette_path=palette,
        output_path=tmp_path / "out" / "map.wbox",
        **kwargs,
    )


class TestConversion:
    """Test full conversions."""

    def test_grass_and_water(self, image_file, basic_palette_file, tmp_path) -> None:
        result = ConversionPipeline().convert(make_request(image_file, basic_palette_file, tmp_path))

        data = read_map(result.output_path)
        assert (data["width"], data["height"]) == (2, 1)
        assert data["tiles"] == [
            {"terrain_id": "grass", "frozen": False},
            {"terrain_id": "water", "frozen": False},
        ]
        assert result.tile_count == 2
        assert result.frozen_count == 0
        assert result.terrain_ids == ("grass", "water")

    def test_freeze_map(self, image_file, basic_palette_file, write_image, tmp_path) -> None:
        freeze = write_image("freeze.png", [[BLACK, WHITE]])
        request = make_request(image_file, basic_palette_file, tmp_path, freeze_map_path=freeze)

        result = ConversionPipeline().convert(request)

        data = read_map(result.output_path)
        assert [tile["frozen"] for tile in data["tiles"]] == [False, True]
        assert result.frozen_count == 1

    def test_template_and_laws(self, image_file, basic_palette_file, write_text, tmp_path) -> None:
        template = write_text("map_data.json", '{"mapStats": {"name": "Pair"}}')
        laws = write_text("laws.txt", "world_law_rebellions=off\nworld_law_bogus=on\n")
        request = make_request(
            image_file, basic_palette_file, tmp_path,
            map_data_path=template, world_laws_path=laws,
        )

        result = ConversionPipeline().convert(request)

        data = read_map(result.output_path)
        assert data["mapStats"] == {"name": "Pair"}
        assert data["laws"]["world_law_rebellions"] is False
        assert len(result.law_warnings) == 1
        assert "world_law_bogus" in result.law_warnings[0]

    def test_output_is_deterministic(self, image_file, basic_palette_file, tmp_path) -> None:
        pipeline = ConversionPipeline()
        first = pipeline.convert(make_request(image_file, basic_palette_file, tmp_path / "a"))
        second = pipeline.convert(
            make_request(image_file, basic_palette_file, tmp_path / "b", workers=3)
        )

        assert first.output_path.read_bytes() == second.output_path.read_bytes()

    def test_swatches_and_preview(self, write_image, basic_palette_file, tmp_path) -> None:
        image = write_image("world.png", [[(10, 120, 10), BLUE]])
        request = make_request(
            image, basic_palette_file, tmp_path,
            policy=ResolutionPolicy.NEAREST,
            swatch_path=tmp_path / "terrain.gpl",
            preview_path=tmp_path / "preview.png",
        )

        result = ConversionPipeline().convert(request)

        assert result.swatch_path.read_bytes().startswith(b"GIMP Palette\n")
        with Image.open(result.preview_path) as preview:
            assert preview.convert("RGB").getpixel((0, 0)) == GREEN
            assert preview.convert("RGB").getpixel((1, 0)) == BLUE


class TestFailures:
    """Failed conversions leave no output behind."""

    def test_strict_unmapped_color(self, write_image, basic_palette_file, tmp_path) -> None:
        image = write_image("world.png", [[GREEN, RED]])
        request = make_request(image, basic_palette_file, tmp_path)

        with pytest.raises(UnmappedPixelError) as exc_info:
            ConversionPipeline().convert(request)

        assert (exc_info.value.x, exc_info.value.y) == (1, 0)
        assert not request.output_path.exists()
        assert list(tmp_path.rglob("*.tmp")) == []

    def test_unmapped_color_skips_side_outputs(self, write_image, basic_palette_file, tmp_path) -> None:
        image = write_image("world.png", [[RED]])
        request = make_request(
            image, basic_palette_file, tmp_path,
            swatch_path=tmp_path / "terrain.ase",
            preview_path=tmp_path / "preview.png",
        )

        with pytest.raises(UnmappedPixelError):
            ConversionPipeline().convert(request)

        assert not (tmp_path / "terrain.ase").exists()
        assert not (tmp_path / "preview.png").exists()

    def test_freeze_map_size_mismatch(self, image_file, basic_palette_file, write_image, tmp_path) -> None:
        freeze = write_image("freeze.png", [[WHITE, WHITE, WHITE]])
        request = make_request(image_file, basic_palette_file, tmp_path, freeze_map_path=freeze)

        with pytest.raises(DimensionMismatchError):
            ConversionPipeline().convert(request)

        assert not request.output_path.exists()

    def test_missing_image(self, basic_palette_file, tmp_path) -> None:
        request = make_request(tmp_path / "missing.png", basic_palette_file, tmp_path)

        with pytest.raises(ImageLoadError):
            ConversionPipeline().convert(request)

    def test_missing_palette(self, image_file, tmp_path) -> None:
        request = make_request(image_file, tmp_path / "missing.txt", tmp_path)

        with pytest.raises(PaletteLoadError):
            ConversionPipeline().convert(request)

    def test_existing_output_survives_failure(self, write_image, basic_palette_file, tmp_path) -> None:
        image = write_image("world.png", [[RED]])
        request = make_request(image, basic_palette_file, tmp_path)
        request.output_path.parent.mkdir(parents=True)
        request.output_path.write_bytes(b"old map")

        with pytest.raises(UnmappedPixelError):
            ConversionPipeline().convert(request)

        assert request.output_path.read_bytes() == b"old map"


class TestExportSwatches:
    """Test swatch export without an image."""

    def test_export_only(self, basic_palette_file, tmp_path) -> None:
        path = export_swatches(basic_palette_file, tmp_path / "terrain.ase")

        assert path.read_bytes()[:4] == b"ASEF"
