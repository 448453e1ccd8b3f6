"""Tests for palette loading and color resolution."""

import pytest

from wbox_mapgen.errors import (
    DuplicateColorError,
    MalformedPaletteLineError,
    PaletteLoadError,
    UnmappedColorError,
)
from wbox_mapgen.palette import PaletteTable, ResolutionPolicy, parse_hex_color


class TestHexColors:
    """Test hex color parsing."""

    def test_with_and_without_hash(self) -> None:
        assert parse_hex_color("#3E3361") == (0x3E, 0x33, 0x61)
        assert parse_hex_color("3e3361") == (0x3E, 0x33, 0x61)

    def test_rejects_bad_colors(self) -> None:
        assert parse_hex_color("#12345") is None
        assert parse_hex_color("#GGGGGG") is None
        assert parse_hex_color("grass") is None


class TestPaletteLoading:
    """Test palette file parsing."""

    def test_load_assigns_order_by_declaration(self, write_text) -> None:
        """order_index counts entries in file order, skipping comments."""
        path = write_text(
            "palette.txt",
            "# comment\n"
            "deep_ocean #3E3361 water liquid\n"
            "\n"
            "; another comment\n"
            "grass #58A934\n"
            "sand F7E898 ground\n",
        )
        palette = PaletteTable.load(path)

        assert [e.terrain_id for e in palette] == ["deep_ocean", "grass", "sand"]
        assert [e.order_index for e in palette] == [0, 1, 2]
        assert palette.entries[0].tags == frozenset({"water", "liquid"})
        assert palette.entries[1].tags == frozenset()
        assert palette.entries[2].color == (0xF7, 0xE8, 0x98)
        assert palette.source == str(path)

    def test_duplicate_color_is_error(self, write_text) -> None:
        path = write_text("palette.txt", "grass #008000\nwater #0000FF\nforest #008000\n")

        with pytest.raises(DuplicateColorError) as exc_info:
            PaletteTable.load(path)

        assert exc_info.value.line_no == 3
        assert exc_info.value.first_line_no == 1
        assert exc_info.value.color == (0, 128, 0)
        assert str(path) in str(exc_info.value)

    def test_malformed_line_names_line(self, write_text) -> None:
        path = write_text("palette.txt", "grass #008000\nwater #00ZZFF\n")

        with pytest.raises(MalformedPaletteLineError) as exc_info:
            PaletteTable.load(path)

        assert exc_info.value.line_no == 2
        assert "line 2" in str(exc_info.value)

    def test_line_without_color_is_malformed(self, write_text) -> None:
        path = write_text("palette.txt", "grass\n")

        with pytest.raises(MalformedPaletteLineError):
            PaletteTable.load(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(PaletteLoadError):
            PaletteTable.load(tmp_path / "missing.txt")

    def test_empty_palette(self, write_text) -> None:
        path = write_text("palette.txt", "# nothing here\n")

        with pytest.raises(PaletteLoadError):
            PaletteTable.load(path)

    def test_terrain_ids_are_distinct(self) -> None:
        palette = PaletteTable.from_entries(
            [((0, 0, 0), "rock"), ((1, 1, 1), "rock"), ((2, 2, 2), "sand")]
        )
        assert palette.terrain_ids() == ["rock", "sand"]


class TestResolution:
    """Test strict and nearest resolution policies."""

    def test_exact_match(self) -> None:
        palette = PaletteTable.from_entries([((0, 128, 0), "grass"), ((0, 0, 255), "water")])
        assert palette.resolve((0, 128, 0)) == "grass"
        assert palette.resolve((0, 0, 255)) == "water"

    def test_strict_rejects_unknown_color(self) -> None:
        palette = PaletteTable.from_entries([((0, 128, 0), "grass")], ResolutionPolicy.STRICT)

        with pytest.raises(UnmappedColorError) as exc_info:
            palette.resolve((1, 128, 0))

        assert exc_info.value.color == (1, 128, 0)

    def test_nearest_picks_closest(self) -> None:
        palette = PaletteTable.from_entries(
            [((0, 0, 0), "black"), ((255, 255, 255), "white"), ((250, 0, 0), "red")],
            ResolutionPolicy.NEAREST,
        )
        assert palette.resolve((200, 10, 10)) == "red"
        assert palette.resolve((30, 30, 30)) == "black"
        assert palette.resolve((240, 240, 200)) == "white"

    def test_nearest_tie_goes_to_lowest_order_index(self) -> None:
        """(1, 0, 0) is equally far from (0, 0, 0) and (2, 0, 0)."""
        first = PaletteTable.from_entries(
            [((0, 0, 0), "a"), ((2, 0, 0), "b")], ResolutionPolicy.NEAREST
        )
        second = PaletteTable.from_entries(
            [((2, 0, 0), "b"), ((0, 0, 0), "a")], ResolutionPolicy.NEAREST
        )

        assert first.resolve((1, 0, 0)) == "a"
        assert second.resolve((1, 0, 0)) == "b"

    def test_policy_is_fixed_at_load(self, write_text) -> None:
        path = write_text("palette.txt", "grass #008000\n")

        assert PaletteTable.load(path, "nearest").resolve((9, 9, 9)) == "grass"
        with pytest.raises(UnmappedColorError):
            PaletteTable.load(path, "strict").resolve((9, 9, 9))

    def test_unknown_policy_name(self) -> None:
        with pytest.raises(ValueError):
            ResolutionPolicy.parse("closest")
