"""
Default input/output paths for conversions.
"""

from pathlib import Path
from typing import List, Union

from .types import SettingsGroup

DEFAULT_PALETTE_PATH = "palettes/no-special.txt"
DEFAULT_MAP_DATA_PATH = "map_data.json"
DEFAULT_WORLD_LAWS_PATH = "worldlaws/default.txt"
DEFAULT_OUTPUT_PATH = "map.wbox"
MAX_RECENT_OUTPUTS = 10


class PathSettings(SettingsGroup):
    """Manages path-related settings."""

    @property
    def palette_path(self) -> Path:
        """Palette used when none is given on the command line."""
        return Path(self._get_str("paths/palette", DEFAULT_PALETTE_PATH))

    @palette_path.setter
    def palette_path(self, value: Union[str, Path]) -> None:
        self._set("paths/palette", str(value))

    @property
    def map_data_path(self) -> Path:
        """Map data template JSON."""
        return Path(self._get_str("paths/map_data", DEFAULT_MAP_DATA_PATH))

    @map_data_path.setter
    def map_data_path(self, value: Union[str, Path]) -> None:
        self._set("paths/map_data", str(value))

    @property
    def world_laws_path(self) -> Path:
        """World laws overrides file."""
        return Path(self._get_str("paths/world_laws", DEFAULT_WORLD_LAWS_PATH))

    @world_laws_path.setter
    def world_laws_path(self, value: Union[str, Path]) -> None:
        self._set("paths/world_laws", str(value))

    @property
    def output_path(self) -> Path:
        """Map container output."""
        return Path(self._get_str("paths/output", DEFAULT_OUTPUT_PATH))

    @output_path.setter
    def output_path(self, value: Union[str, Path]) -> None:
        self._set("paths/output", str(value))

    @property
    def recent_outputs(self) -> List[str]:
        """Recently written map files, newest first."""
        return self._get_list("paths/recent_outputs", [])

    def add_recent_output(self, file_path: Union[str, Path]) -> None:
        """Add a written map to the recent list (max 10 items)."""
        recent = self.recent_outputs
        file_str = str(file_path)

        if file_str in recent:
            recent.remove(file_str)
        recent.insert(0, file_str)

        self._set("paths/recent_outputs", recent[:MAX_RECENT_OUTPUTS])
