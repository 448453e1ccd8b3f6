"""Basic unit tests for wbox-mapgen modules."""

import logging


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_app_settings_init(self, settings) -> None:
        """Test AppSettings can be initialized."""
        assert settings is not None
        assert settings.get_settings_file_path().endswith("settings.ini")

    def test_app_settings_validation(self, settings) -> None:
        """Test settings validation returns result."""
        validation = settings.validate()
        assert validation is not None
        assert isinstance(validation.errors, list)


class TestModels:
    """Test model creation."""

    def test_palette_entry_creation(self) -> None:
        """Test PaletteEntry can be created."""
        from wbox_mapgen.palette import PaletteEntry

        entry = PaletteEntry(color=(0, 128, 0), terrain_id="grass", order_index=0)
        assert entry.terrain_id == "grass"
        assert entry.hex == "#008000"

    def test_tile_creation(self) -> None:
        """Test Tile defaults to unfrozen."""
        from wbox_mapgen.maps import Tile

        tile = Tile(x=1, y=2, terrain_id="water")
        assert tile.frozen is False

    def test_version_exported(self) -> None:
        import wbox_mapgen

        assert wbox_mapgen.__version__ == "0.1.0"


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, settings) -> None:
        """Test logging setup works with settings."""
        from wbox_mapgen.utils.logging_config import setup_logging

        root = logging.getLogger()
        handlers = list(root.handlers)
        try:
            setup_logging(settings=settings)

            logger = logging.getLogger("wbox_mapgen")
            assert logger.level == logging.DEBUG
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = handlers

    def test_csv_formatter_escapes_quotes(self) -> None:
        from wbox_mapgen.utils.logging_config import CSVFormatter

        record = logging.LogRecord("wbox_mapgen.x", logging.INFO, __file__, 7, 'say "hi"', None, None)
        line = CSVFormatter().format(record)

        assert line.endswith('"say ""hi"""')
        assert '"wbox_mapgen.x"' in line
