"""World laws: global on/off rules carried by every map."""

from .defaults import DEFAULT_WORLD_LAWS
from .law_set import WorldLaw, WorldLawSet

__all__ = [
    "DEFAULT_WORLD_LAWS",
    "WorldLaw",
    "WorldLawSet",
]
