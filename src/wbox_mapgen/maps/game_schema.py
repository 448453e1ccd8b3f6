"""
Game-facing map keys derived from a MapDocument.

WorldBox reads terrain from a run-length table rather than from per-tile
objects:

    tileMap       terrain ids; the template's own entries first, then every
                  new id in first-seen row-major order
    tileArray     one list per row, bottom row first: tileMap index of each run
    tileAmounts   one list per row, same order: length of each run
    worldLaws     {"list": [...]} with {"name": n} for enabled laws and
                  {"name": n, "boolVal": false} for disabled ones, appended
                  after any entries already in the template's list
    frozen_tiles  row-major indices of frozen tiles

Other members of a template ``worldLaws`` object are kept as they are.
"""

import copy
from typing import Any, Dict, List, Mapping, Tuple

from .models import MapDocument

GAME_KEYS: Tuple[str, ...] = ("tileMap", "tileArray", "tileAmounts", "worldLaws", "frozen_tiles")


def build_tile_map(document: MapDocument, template: Mapping[str, Any]) -> List[str]:
    """Template tileMap entries followed by the document's new terrain ids."""
    existing = template.get("tileMap")
    tile_map = [item for item in existing if isinstance(item, str)] if isinstance(existing, list) else []
    known = set(tile_map)
    for terrain_id in document.terrain_ids():
        if terrain_id not in known:
            tile_map.append(terrain_id)
            known.add(terrain_id)
    return tile_map


def run_length_rows(
    document: MapDocument, tile_map: List[str]
) -> Tuple[List[List[int]], List[List[int]]]:
    """Encode each row as (tileMap index, run length) pairs, bottom row first."""
    index_of: Dict[str, int] = {}
    for index, terrain_id in enumerate(tile_map):
        index_of.setdefault(terrain_id, index)

    tile_array: List[List[int]] = []
    tile_amounts: List[List[int]] = []
    for y in reversed(range(document.height)):
        indices: List[int] = []
        amounts: List[int] = []
        row_start = y * document.width
        for tile in document.tiles[row_start:row_start + document.width]:
            index = index_of[tile.terrain_id]
            if indices and indices[-1] == index:
                amounts[-1] += 1
            else:
                indices.append(index)
                amounts.append(1)
        tile_array.append(indices)
        tile_amounts.append(amounts)
    return tile_array, tile_amounts


def law_entries(laws: Mapping[str, bool]) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for name, enabled in laws.items():
        if enabled:
            entries.append({"name": name})
        else:
            entries.append({"name": name, "boolVal": False})
    return entries


def build_world_laws(document: MapDocument, template: Mapping[str, Any]) -> Dict[str, Any]:
    existing = template.get("worldLaws")
    world_laws: Dict[str, Any] = copy.deepcopy(existing) if isinstance(existing, dict) else {}
    current = world_laws.get("list")
    entries = list(current) if isinstance(current, list) else []
    entries.extend(law_entries(document.laws))
    world_laws["list"] = entries
    return world_laws


def game_fields(document: MapDocument) -> Dict[str, Any]:
    """All game-facing keys for a document, in GAME_KEYS order."""
    template = document.template_overlay
    tile_map = build_tile_map(document, template)
    tile_array, tile_amounts = run_length_rows(document, tile_map)
    return {
        "tileMap": tile_map,
        "tileArray": tile_array,
        "tileAmounts": tile_amounts,
        "worldLaws": build_world_laws(document, template),
        "frozen_tiles": document.frozen_indices(),
    }
