"""
Palette table: loading color -> terrain rules and resolving pixel colors.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..errors import (
    DuplicateColorError,
    MalformedPaletteLineError,
    PaletteLoadError,
    UnmappedColorError,
)
from .models import RGB8, PaletteEntry, ResolutionPolicy, distance_sq, parse_hex_color

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", ";")


class PaletteTable:
    """Read-only set of palette entries with exact and nearest lookup.

    Entries keep their declaration order (``order_index``), which drives
    swatch export. Lookups hash on the exact color first; what happens on a
    miss is decided once, by the policy the table was loaded with.
    """

    def __init__(
        self,
        entries: Iterable[PaletteEntry],
        policy: ResolutionPolicy = ResolutionPolicy.STRICT,
        source: Optional[str] = None,
    ):
        self._entries: Tuple[PaletteEntry, ...] = tuple(
            sorted(entries, key=lambda e: e.order_index)
        )
        self._policy = policy
        self.source = source

        self._by_color: Dict[RGB8, PaletteEntry] = {}
        for entry in self._entries:
            if entry.color in self._by_color:
                first = self._by_color[entry.color]
                raise DuplicateColorError(
                    source, entry.color, entry.order_index + 1, first.order_index + 1
                )
            self._by_color[entry.color] = entry

        if not self._entries:
            raise PaletteLoadError("palette has no entries", source)

    # === CONSTRUCTION ===

    @classmethod
    def load(
        cls,
        source: Union[str, Path],
        policy: Union[ResolutionPolicy, str] = ResolutionPolicy.STRICT,
    ) -> "PaletteTable":
        """Load a palette file.

        Args:
            source: Path to a palette text file
            policy: Resolution policy for colors missing from the palette

        Returns:
            Loaded PaletteTable

        Raises:
            PaletteLoadError: If the file is unreadable, empty or invalid
        """
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise PaletteLoadError(f"cannot read palette: {e}", path) from e

        table = cls.from_lines(text.splitlines(), policy, source=str(path))
        logger.info(
            f"Loaded palette {path.name}: {len(table)} entries, policy={table.policy.value}"
        )
        return table

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        policy: Union[ResolutionPolicy, str] = ResolutionPolicy.STRICT,
        source: Optional[str] = None,
    ) -> "PaletteTable":
        """Parse palette lines of the form ``terrain_id #RRGGBB [tag ...]``."""
        entries: List[PaletteEntry] = []
        seen: Dict[RGB8, int] = {}

        for line_no, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIXES):
                continue

            fields = stripped.split()
            if len(fields) < 2:
                raise MalformedPaletteLineError(
                    source, line_no, line, "expected '<terrain_id> <#RRGGBB> [tags]'"
                )

            terrain_id, color_text, *tags = fields
            color = parse_hex_color(color_text)
            if color is None:
                raise MalformedPaletteLineError(
                    source, line_no, line, f"invalid color {color_text!r}"
                )

            if color in seen:
                raise DuplicateColorError(source, color, line_no, seen[color])
            seen[color] = line_no

            entries.append(
                PaletteEntry(
                    color=color,
                    terrain_id=terrain_id,
                    tags=frozenset(tags),
                    order_index=len(entries),
                )
            )

        return cls(entries, ResolutionPolicy.parse(policy), source=source)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Tuple[RGB8, str]],
        policy: Union[ResolutionPolicy, str] = ResolutionPolicy.STRICT,
    ) -> "PaletteTable":
        """Build a table from (color, terrain_id) pairs in declaration order."""
        return cls(
            (
                PaletteEntry(color=tuple(color), terrain_id=terrain_id, order_index=i)  # type: ignore[arg-type]
                for i, (color, terrain_id) in enumerate(entries)
            ),
            ResolutionPolicy.parse(policy),
        )

    # === QUERIES ===

    @property
    def policy(self) -> ResolutionPolicy:
        return self._policy

    @property
    def entries(self) -> Tuple[PaletteEntry, ...]:
        """Entries ordered by order_index."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries)

    def terrain_ids(self) -> List[str]:
        """Distinct terrain ids in declaration order."""
        return list(dict.fromkeys(e.terrain_id for e in self._entries))

    def resolve(self, color: RGB8) -> str:
        """Resolve a pixel color to a terrain id.

        Raises:
            UnmappedColorError: If the color is absent and the policy is strict
        """
        return self.resolve_entry(color).terrain_id

    def resolve_entry(self, color: RGB8) -> PaletteEntry:
        """Resolve a pixel color to its palette entry."""
        entry = self._by_color.get(color)
        if entry is not None:
            return entry
        if self._policy is ResolutionPolicy.STRICT:
            raise UnmappedColorError(color)
        return self._nearest(color)

    def _nearest(self, color: RGB8) -> PaletteEntry:
        # Entries are sorted by order_index, so strict '<' keeps the earliest on ties.
        best = self._entries[0]
        best_distance = distance_sq(color, best.color)
        for entry in self._entries[1:]:
            d = distance_sq(color, entry.color)
            if d < best_distance:
                best, best_distance = entry, d
        return best
