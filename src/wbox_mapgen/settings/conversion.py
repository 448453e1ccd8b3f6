"""
Conversion behavior settings.
"""

import logging

from ..palette.models import ResolutionPolicy
from .types import SettingsGroup

logger = logging.getLogger(__name__)

MAX_WORKERS = 64


class ConversionSettings(SettingsGroup):
    """Palette policy, parallelism and output tuning."""

    @property
    def palette_policy(self) -> ResolutionPolicy:
        """How colors missing from the palette are handled (default: nearest)."""
        value = self._get_str("conversion/palette_policy", ResolutionPolicy.NEAREST.value)
        try:
            return ResolutionPolicy.parse(value)
        except ValueError:
            logger.warning(f"Invalid palette policy in settings: {value}, using nearest")
            return ResolutionPolicy.NEAREST

    @palette_policy.setter
    def palette_policy(self, value: "ResolutionPolicy | str") -> None:
        self._set("conversion/palette_policy", ResolutionPolicy.parse(value).value)

    @property
    def workers(self) -> int:
        """Threads used for tile resolution."""
        value = self._get_int("conversion/workers", 4)
        return value if 1 <= value <= MAX_WORKERS else 4

    @workers.setter
    def workers(self, value: int) -> None:
        if 1 <= value <= MAX_WORKERS:
            self._set("conversion/workers", value)
        else:
            logger.warning(f"Invalid worker count: {value}, keeping current: {self.workers}")

    @property
    def compression_level(self) -> int:
        """zlib level for map containers."""
        value = self._get_int("conversion/compression_level", 1)
        return value if 0 <= value <= 9 else 1

    @compression_level.setter
    def compression_level(self, value: int) -> None:
        if 0 <= value <= 9:
            self._set("conversion/compression_level", value)
        else:
            logger.warning(
                f"Invalid compression level: {value}, keeping current: {self.compression_level}"
            )

    @property
    def pause_on_exit(self) -> bool:
        """Wait for Enter before the command line tool exits."""
        return self._get_bool("cli/pause_on_exit", True)

    @pause_on_exit.setter
    def pause_on_exit(self, value: bool) -> None:
        self._set("cli/pause_on_exit", value)
