"""Map data template: externally owned JSON merged verbatim into the output.

The template carries everything that is not derived from pixels (kingdoms,
spawn points, global metadata). Its shape belongs to the game, so it is kept
as a plain key-value document and only checked at the boundary.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, KeysView, List, Mapping, Optional, Union

import orjson

from ..errors import TemplateLoadError

logger = logging.getLogger(__name__)


class MapTemplate(Mapping[str, Any]):
    """Read-only JSON object used as the base of the output map."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None, source: Optional[str] = None):
        # Deep copy so callers cannot mutate the template behind our back
        self._data: Dict[str, Any] = copy.deepcopy(dict(data or {}))
        self.source = source

    @classmethod
    def empty(cls) -> "MapTemplate":
        return cls()

    @classmethod
    def load(cls, source: Optional[Union[str, Path]]) -> "MapTemplate":
        """Load a template from a JSON file.

        Args:
            source: Path to the map data JSON, or None for an empty template

        Raises:
            TemplateLoadError: If the file is missing, unreadable, not JSON,
                or its root is not an object
        """
        if source is None:
            logger.info("No map data template given, starting from an empty document")
            return cls.empty()

        path = Path(source)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise TemplateLoadError(f"cannot read map data: {e}", path) from e

        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise TemplateLoadError(f"invalid JSON: {e}", path) from e

        if not isinstance(data, dict):
            raise TemplateLoadError(
                f"map data root must be a JSON object, got {type(data).__name__}", path
            )

        logger.info(f"Loaded map data template {path.name} with {len(data)} top-level key(s)")
        return cls(data, source=str(path))

    # === MAPPING INTERFACE ===

    def __getitem__(self, key: str) -> Any:
        # Values are copied out so nested lists and dicts stay read-only
        return copy.deepcopy(self._data[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> KeysView[str]:
        return self._data.keys()

    def to_dict(self) -> Dict[str, Any]:
        """Deep copy of the template content."""
        return copy.deepcopy(self._data)

    def reserved_collisions(self, reserved: Iterable[str]) -> List[str]:
        """Template keys that collide with ``reserved``, in template order."""
        reserved_set = set(reserved)
        return [key for key in self._data if key in reserved_set]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MapTemplate):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MapTemplate(keys={list(self._data)!r})"
