"""Category catalog seed data.

The bundled ``categories.json`` holds the default debt, expense and savings
categories. Seed files are validated with pydantic before use.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from models.category import CategoryType
from logger import get_logger

logger = get_logger()


class SubcategorySeed(BaseModel):
    """Seed entry for a subcategory."""

    name: str = Field(min_length=1)
    priority: int = 0
    allocation_percentage: float = Field(default=0.0, ge=0, le=100)
    description: str = ""


class CategorySeed(BaseModel):
    """Seed entry for a category and its subcategories."""

    name: str = Field(min_length=1)
    type: CategoryType
    priority: int = 0
    emoji: str = ""
    description: str = ""
    amount: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    subcategories: List[SubcategorySeed] = Field(default_factory=list)


class CatalogSeed(BaseModel):
    """Top-level seed document."""

    categories: List[CategorySeed]


def load_seed_file(seed_file: Path) -> List[CategorySeed]:
    """Load and validate a catalog seed file.

    Args:
        seed_file: Path to a JSON seed document.

    Returns:
        Validated category seed entries, in file order.

    Raises:
        FileNotFoundError: If the seed file doesn't exist.
        pydantic.ValidationError: If the document doesn't match the schema.
    """
    if not seed_file.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_file}")

    logger.info(f"Loading category seed from {seed_file}")

    with open(seed_file, "r", encoding="utf-8") as f:
        catalog = CatalogSeed.model_validate_json(f.read())

    return catalog.categories
