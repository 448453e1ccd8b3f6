"""Tests for map data template loading."""

import pytest

from wbox_mapgen.errors import TemplateLoadError
from wbox_mapgen.maps import MapTemplate


class TestMapTemplate:
    """Test template loading and read-only behavior."""

    def test_load_keeps_key_order(self, write_text) -> None:
        path = write_text(
            "map_data.json",
            '{"mapStats": {"name": "Earth"}, "kingdoms": [], "spawnPoints": [[1, 2]]}',
        )
        template = MapTemplate.load(path)

        assert list(template.keys()) == ["mapStats", "kingdoms", "spawnPoints"]
        assert template["mapStats"] == {"name": "Earth"}
        assert template.source == str(path)

    def test_none_gives_empty_template(self) -> None:
        assert len(MapTemplate.load(None)) == 0

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(TemplateLoadError):
            MapTemplate.load(tmp_path / "missing.json")

    def test_invalid_json(self, write_text) -> None:
        path = write_text("map_data.json", "{not json")

        with pytest.raises(TemplateLoadError):
            MapTemplate.load(path)

    def test_root_must_be_object(self, write_text) -> None:
        path = write_text("map_data.json", "[1, 2, 3]")

        with pytest.raises(TemplateLoadError) as exc_info:
            MapTemplate.load(path)

        assert "object" in str(exc_info.value)

    def test_template_is_isolated_from_source_dict(self) -> None:
        data = {"kingdoms": [{"name": "north"}]}
        template = MapTemplate(data)

        data["kingdoms"].append({"name": "south"})
        template.to_dict()["kingdoms"].clear()

        assert template["kingdoms"] == [{"name": "north"}]

    def test_reserved_collisions_in_template_order(self) -> None:
        template = MapTemplate({"tiles": [], "name": "x", "width": 3})

        assert template.reserved_collisions(("width", "height", "tiles", "laws")) == ["tiles", "width"]

    def test_equality_with_mapping(self) -> None:
        assert MapTemplate({"a": 1}) == {"a": 1}
        assert MapTemplate({"a": 1}) == MapTemplate({"a": 1})
        assert MapTemplate({"a": 1}) != MapTemplate({"a": 2})

    def test_nested_values_cannot_be_mutated(self) -> None:
        template = MapTemplate({"kingdoms": [{"name": "north"}], "mapStats": {"age": 1}})

        template["kingdoms"].append({"name": "south"})
        dict(template.items())["mapStats"]["age"] = 99
        template.get("mapStats")["age"] = 42

        assert template["kingdoms"] == [{"name": "north"}]
        assert template["mapStats"] == {"age": 1}
