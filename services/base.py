"""Base services container for dependency injection."""

from datetime import date
from typing import Callable, Optional
from uuid import UUID, uuid4

from config import Config


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject deterministic identity and time for testing.

    Args:
        config: Application configuration object.
        id_factory: Produces ids for catalog entries.
        clock: Returns today's date for debt amortization.
        seed: Whether to load the configured catalog seed file.
    """

    def __init__(
        self,
        config: Config,
        id_factory: Callable[[], UUID] = uuid4,
        clock: Optional[Callable[[], date]] = None,
        seed: bool = True,
    ):
        self.config = config

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.plans import PlanService
        from engine.allocations import AllocationEngine

        self.categories = CategoryService(id_factory=id_factory)
        if seed:
            self.categories.seed_from_file(config.catalog_seed_path)

        self.plans = PlanService(self.categories)
        self.engine = AllocationEngine(
            self.categories,
            cadence=config.default_cadence,
            clock=clock or date.today,
        )
