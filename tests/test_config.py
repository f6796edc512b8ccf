import logging
import pytest
from datetime import date
from pathlib import Path

import config as config_module
from config import Config, get_default_seed_path, load_config
from logger import get_log_path, get_logger, setup_logging
from models.cadence import PaymentCadence


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point the home directory at a temporary directory."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


class TestConfig:
    """Tests for configuration loading."""

    def test_default_config_written(self, home):
        """Test a missing config file is created with defaults."""
        config = load_config()

        assert (home / ".config" / "budgie.toml").exists()
        assert config.base_dir == home / "data" / "budgie"
        assert config.default_cadence == PaymentCadence.MONTHLY
        assert config.catalog_seed_path == get_default_seed_path()

    def test_round_trip_through_file(self, home):
        """Test values written by a first load are read back."""
        first = load_config()
        second = load_config()

        assert second == first

    def test_custom_values(self, home):
        """Test values from an existing config file are used."""
        config_path = config_module.get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text(
            'base_dir = "/tmp/budgie-test"\n'
            "[logging]\n"
            'level = "DEBUG"\n'
            "[budget]\n"
            'default_cadence = "Semi-Monthly"\n'
            "[catalog]\n"
            'seed_file = "/tmp/seed.json"\n'
        )

        config = load_config()

        assert config.log_level == "DEBUG"
        assert config.log_dir == Path("/tmp/budgie-test/logs")
        assert config.default_cadence == PaymentCadence.SEMI_MONTHLY
        assert config.catalog_seed_path == Path("/tmp/seed.json")

    def test_unknown_cadence(self, home):
        """Test an unknown cadence in the config file raises ValueError."""
        config_path = config_module.get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text('[budget]\ndefault_cadence = "Hourly"\n')

        with pytest.raises(ValueError):
            load_config()


class TestLogging:
    """Tests for logging setup."""

    def test_setup_logging_creates_dated_file(self, test_config):
        """Test the log directory and a dated log file handler are set up."""
        logger = setup_logging(test_config)

        assert logger is get_logger()
        assert logger.level == logging.DEBUG
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert Path(file_handlers[0].baseFilename).name.startswith("budgie-")
        assert test_config.log_dir.exists()

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_console_can_be_disabled(self, test_config):
        """Test only the file handler is attached without console output."""
        logger = setup_logging(test_config, console=False)

        assert [type(h) for h in logger.handlers] == [logging.FileHandler]

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_unknown_log_level(self, test_config):
        """Test a misspelled level name raises ValueError."""
        test_config.log_level = "LOUD"

        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(test_config)

    def test_log_path_is_dated(self, test_config):
        """Test the log file name carries the day."""
        path = get_log_path(test_config, date(2026, 3, 4))

        assert path == test_config.log_dir / "budgie-2026-03-04.log"

    def test_config_default_has_no_seed_override(self):
        """Test the default config uses the bundled seed."""
        assert Config.default().seed_file is None
