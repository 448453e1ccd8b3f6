"""
Settings validation system for wbox-mapgen.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        paths = self.settings.paths
        if not paths.palette_path.exists():
            warnings.append(f"Default palette not found: {paths.palette_path}")
        if not paths.map_data_path.exists():
            warnings.append(f"Default map data template not found: {paths.map_data_path}")

        output_dir = paths.output_path.parent
        if str(output_dir) and output_dir.exists() and not output_dir.is_dir():
            errors.append(f"Output directory is not a directory: {output_dir}")

        level = self.settings.logging.console_log_level.upper()
        if level not in VALID_LEVELS:
            errors.append(f"Invalid console log level: {level}")

        # Drop recent outputs that no longer exist
        recent = paths.recent_outputs
        valid_recent = [p for p in recent if Path(p).exists()]
        if len(valid_recent) != len(recent):
            for missing in (p for p in recent if p not in valid_recent):
                warnings.append(f"Recent output no longer exists: {missing}")
            self.settings.settings.setValue("paths/recent_outputs", valid_recent)
            self.settings.settings.sync()

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
