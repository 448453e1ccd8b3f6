"""
World law set: default table merged with overrides from a laws file.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..errors import LawLoadError
from .defaults import DEFAULT_WORLD_LAWS

logger = logging.getLogger(__name__)

# NAME=on, NAME = off, or the legacy whitespace form "NAME true"
_LAW_LINE = re.compile(r"^([A-Za-z0-9_.\-]+)\s*(?:=|\s)\s*(\S+)$")

BOOL_TOKENS = {
    "on": True,
    "true": True,
    "off": False,
    "false": False,
}


@dataclass(frozen=True)
class WorldLaw:
    """A single named global rule."""

    name: str
    enabled: bool


class WorldLawSet:
    """Merged world laws.

    The key set always equals the default table's key set. Overrides for
    unknown names and malformed lines are collected as warnings and skipped.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, bool]] = None,
        defaults: Mapping[str, bool] = DEFAULT_WORLD_LAWS,
        warnings: Iterable[str] = (),
    ):
        merged: Dict[str, bool] = dict(defaults)
        collected = list(warnings)
        for name, enabled in (overrides or {}).items():
            if name not in merged:
                collected.append(f"unknown world law {name!r} ignored")
                continue
            merged[name] = bool(enabled)
        self._laws: Mapping[str, bool] = MappingProxyType(merged)
        self._warnings: Tuple[str, ...] = tuple(collected)

    @classmethod
    def load(
        cls,
        source: Optional[Union[str, Path]],
        defaults: Mapping[str, bool] = DEFAULT_WORLD_LAWS,
    ) -> "WorldLawSet":
        """Load overrides from a world laws file.

        A missing file (or no source at all) yields the defaults.

        Raises:
            LawLoadError: If the file exists but cannot be read
        """
        if source is None:
            logger.info("No world laws file given, using defaults")
            return cls(defaults=defaults)

        path = Path(source)
        if not path.exists():
            logger.info(f"World laws file not found: {path}, using defaults")
            return cls(defaults=defaults)

        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise LawLoadError(f"cannot read world laws: {e}", path) from e

        law_set = cls.from_lines(text.splitlines(), defaults, source_name=str(path))
        overridden = sum(
            1 for name, value in law_set.as_mapping().items() if value != defaults[name]
        )
        logger.info(
            f"Loaded world laws from {path.name}: {overridden} changed from defaults, "
            f"{len(law_set.warnings)} warning(s)"
        )
        return law_set

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        defaults: Mapping[str, bool] = DEFAULT_WORLD_LAWS,
        source_name: str = "<world laws>",
    ) -> "WorldLawSet":
        """Parse ``LAW_NAME=on|off`` lines."""
        overrides: Dict[str, bool] = {}
        warnings: List[str] = []

        for line_no, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            match = _LAW_LINE.match(stripped)
            value = BOOL_TOKENS.get(match.group(2).lower()) if match else None
            if match is None or value is None:
                message = f"{source_name}:{line_no}: malformed law line skipped: {stripped!r}"
                logger.warning(message)
                warnings.append(message)
                continue

            name = match.group(1)
            if name not in defaults:
                message = f"{source_name}:{line_no}: unknown world law {name!r} ignored"
                logger.warning(message)
                warnings.append(message)
                continue

            overrides[name] = value

        return cls(overrides, defaults, warnings)

    # === QUERIES ===

    def as_mapping(self) -> Mapping[str, bool]:
        """Read-only view of law name -> enabled, in default-table order."""
        return self._laws

    def laws(self) -> Tuple[WorldLaw, ...]:
        return tuple(WorldLaw(name, enabled) for name, enabled in self._laws.items())

    def is_enabled(self, name: str) -> bool:
        return self._laws[name]

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self._warnings

    def __len__(self) -> int:
        return len(self._laws)
