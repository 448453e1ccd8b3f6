"""Tests for the game-facing map keys."""

import zlib

import orjson
import pytest

from wbox_mapgen.imaging import PixelGrid
from wbox_mapgen.laws import DEFAULT_WORLD_LAWS, WorldLawSet
from wbox_mapgen.maps import FreezeMask, MapAssembler, MapSerializer, MapTemplate, game_fields
from wbox_mapgen.palette import PaletteTable

GRASS = (0, 128, 0)
WATER = (0, 0, 255)
SAND = (240, 220, 130)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

ROWS = [
    [GRASS, GRASS, WATER],
    [WATER, SAND, SAND],
]


@pytest.fixture
def palette() -> PaletteTable:
    return PaletteTable.from_entries([(GRASS, "grass"), (WATER, "water"), (SAND, "sand")])


def assemble(palette, template=None, laws=None, freeze_rows=None):
    pixels = PixelGrid.from_rows(ROWS)
    freeze = None
    if freeze_rows is not None:
        freeze = FreezeMask.load(PixelGrid.from_rows(freeze_rows), 3, 2)
    return MapAssembler().assemble(pixels, palette, freeze, laws, template)


class TestRunLengthTiles:
    """tileMap, tileArray and tileAmounts."""

    def test_three_by_two_bottom_row_first(self, palette) -> None:
        fields = game_fields(assemble(palette))

        assert fields["tileMap"] == ["grass", "water", "sand"]
        # Row 1 (water, sand, sand) comes before row 0 (grass, grass, water)
        assert fields["tileArray"] == [[1, 2], [0, 1]]
        assert fields["tileAmounts"] == [[1, 2], [2, 1]]

    def test_template_tile_map_is_extended(self, palette) -> None:
        template = MapTemplate({"tileMap": ["water", "lava"]})
        fields = game_fields(assemble(palette, template=template))

        assert fields["tileMap"] == ["water", "lava", "grass", "sand"]
        assert fields["tileArray"] == [[0, 3], [2, 0]]
        assert fields["tileAmounts"] == [[1, 2], [2, 1]]

    def test_runs_cover_every_tile(self, palette) -> None:
        fields = game_fields(assemble(palette))

        assert all(sum(amounts) == 3 for amounts in fields["tileAmounts"])
        assert len(fields["tileArray"]) == 2


class TestWorldLawsAndFrozenTiles:
    """worldLaws list entries and frozen tile indices."""

    def test_law_entries(self, palette) -> None:
        laws = WorldLawSet.from_lines(["world_law_hunger=off"])
        entries = game_fields(assemble(palette, laws=laws))["worldLaws"]["list"]

        assert [entry["name"] for entry in entries] == list(DEFAULT_WORLD_LAWS)
        assert {"name": "world_law_hunger", "boolVal": False} in entries
        assert {"name": "world_law_diplomacy"} in entries

    def test_template_world_laws_are_extended(self, palette) -> None:
        template = MapTemplate({"worldLaws": {"list": [{"name": "custom"}], "extra": 1}})
        world_laws = game_fields(assemble(palette, template=template))["worldLaws"]

        assert world_laws["extra"] == 1
        assert world_laws["list"][0] == {"name": "custom"}
        assert len(world_laws["list"]) == len(DEFAULT_WORLD_LAWS) + 1

    def test_frozen_tiles_are_row_major_indices(self, palette) -> None:
        freeze_rows = [[BLACK, BLACK, WHITE], [WHITE, BLACK, BLACK]]
        fields = game_fields(assemble(palette, freeze_rows=freeze_rows))

        assert fields["frozen_tiles"] == [2, 3]

    def test_no_freeze_map_gives_empty_list(self, palette) -> None:
        assert game_fields(assemble(palette))["frozen_tiles"] == []


class TestContainerPlacement:
    """Game keys inside the encoded container."""

    def test_template_position_is_kept(self, palette) -> None:
        template = MapTemplate({"tileArray": "stale", "mapStats": {"name": "Isle"}})
        document = assemble(palette, template=template)

        data = orjson.loads(zlib.decompress(MapSerializer().encode(document)))

        keys = list(data)
        assert keys.index("tileArray") < keys.index("mapStats")
        assert data["tileArray"] == [[1, 2], [0, 1]]
        assert data["mapStats"] == {"name": "Isle"}
