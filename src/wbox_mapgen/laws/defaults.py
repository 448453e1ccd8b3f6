"""
Built-in world law table.

Every map carries exactly these laws. A world-laws file can flip their
states but never add or remove names.
"""

from types import MappingProxyType
from typing import Mapping

_DEFAULTS = {
    # Civilizations
    "world_law_diplomacy": True,
    "world_law_rebellions": True,
    "world_law_border_stealing": True,
    "world_law_kingdom_expansion": True,
    "world_law_civ_babies": True,
    "world_law_civ_army": True,
    "world_law_angry_civilians": False,
    "world_law_hunger": True,
    "world_law_old_age": True,
    # Creatures
    "world_law_animals_spawn": True,
    "world_law_animals_babies": True,
    "world_law_peaceful_monsters": False,
    "world_law_rat_plague": False,
    # Nature
    "world_law_grow_grass": True,
    "world_law_grow_trees": True,
    "world_law_vegetation_random_seeds": True,
    "world_law_biome_overgrowth": True,
    "world_law_erosion": True,
    "world_law_forever_lava": False,
    "world_law_gaias_covenant": False,
    # Disasters
    "world_law_disasters_nature": True,
    "world_law_disasters_other": True,
    "world_law_cursed_world": False,
}

DEFAULT_WORLD_LAWS: Mapping[str, bool] = MappingProxyType(_DEFAULTS)
"""Law name -> default enabled state, in canonical order."""
