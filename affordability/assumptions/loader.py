"""Affordability assumption loading."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from logger import get_logger

logger = get_logger()


class AssumptionsManager:
    """Manages loading of default affordability assumptions from YAML files."""

    def __init__(self, assumptions_dir: Optional[Path] = None):
        """Initialize the assumptions manager.

        Args:
            assumptions_dir: Directory containing assumption YAML files.
                        Defaults to affordability/assumptions/ in the project.
        """
        if assumptions_dir is None:
            self.assumptions_dir = Path(__file__).parent
        else:
            self.assumptions_dir = assumptions_dir

        self._cache: Dict[str, Dict[str, Any]] = {}

    def load(self, item_name: str) -> Dict[str, Any]:
        """Load an item's assumption file.

        Args:
            item_name: Name of the assumption file (without .yaml extension).

        Returns:
            Dictionary with title, description, version and assumptions.

        Raises:
            FileNotFoundError: If the assumption file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
        """
        if item_name in self._cache:
            return self._cache[item_name]

        assumptions_file = self.assumptions_dir / f"{item_name}.yaml"

        if not assumptions_file.exists():
            raise FileNotFoundError(f"Assumptions file not found: {assumptions_file}")

        logger.debug(f"Loading assumptions from {assumptions_file}")

        with open(assumptions_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        self._cache[item_name] = config

        return config

    def resolve(
        self, item_name: str, overrides: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Get an item's default assumptions with overrides applied.

        Args:
            item_name: Name of the assumption file.
            overrides: Values replacing the defaults, keyed like the file.

        Returns:
            A new dictionary; the cached defaults are not modified.
        """
        defaults = self.load(item_name).get("assumptions", {})
        merged = dict(defaults)
        if overrides:
            merged.update(overrides)
        return merged
