"""Configuration management for Budgie.

Reads configuration from ~/.config/budgie.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w

from models.cadence import PaymentCadence


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    default_cadence: PaymentCadence
    seed_file: Optional[Path] = None

    @property
    def catalog_seed_path(self) -> Path:
        """Get the seed file used to build the category catalog."""
        return self.seed_file or get_default_seed_path()

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "budgie"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
            default_cadence=PaymentCadence.MONTHLY,
            seed_file=None,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "budgie.toml"


def get_default_seed_path() -> Path:
    """Get the path to the bundled category catalog seed.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "seed" / "categories.json"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.

    Raises:
        ValueError: If the configured default cadence is not a known cadence.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "budgie"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    budget_config = data.get("budget", {})
    default_cadence = PaymentCadence.from_label(
        budget_config.get("default_cadence", PaymentCadence.MONTHLY.value)
    )

    catalog_config = data.get("catalog", {})
    seed_file = catalog_config.get("seed_file")

    return Config(
        base_dir=base_dir,
        log_level=log_level,
        log_dir=log_dir,
        default_cadence=default_cadence,
        seed_file=Path(seed_file) if seed_file else None,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "budget": {
            "default_cadence": config.default_cadence.value,
        },
    }
    # TOML has no null, so an unset seed file is simply omitted
    if config.seed_file:
        data["catalog"] = {"seed_file": str(config.seed_file)}

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
