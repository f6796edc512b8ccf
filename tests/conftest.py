"""Shared pytest fixtures for all tests."""

import itertools
import pytest
from datetime import date
from uuid import UUID

from config import Config
from models.cadence import PaymentCadence
from services.base import Services

TODAY = date(2026, 1, 15)


def sequential_ids():
    """Create an id factory yielding UUIDs 1, 2, 3, ..."""
    counter = itertools.count(1)
    return lambda: UUID(int=next(counter))


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration rooted in a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "budgie",
        log_level="DEBUG",
        log_dir=tmp_path / "budgie" / "logs",
        default_cadence=PaymentCadence.MONTHLY,
    )


@pytest.fixture
def services(test_config):
    """Create a Services container with an empty catalog.

    Ids are sequential and today is fixed at 2026-01-15.

    Returns:
        Services: Services container for testing.
    """
    return Services(
        test_config, id_factory=sequential_ids(), clock=lambda: TODAY, seed=False
    )


@pytest.fixture
def seeded_services(test_config):
    """Create a Services container with the bundled category catalog."""
    return Services(test_config, id_factory=sequential_ids(), clock=lambda: TODAY)
