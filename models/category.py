"""Budget category models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union
from uuid import UUID


class CategoryType(Enum):
    DEBT = "debt"
    NEED = "need"
    WANT = "want"
    SAVING = "saving"

    @property
    def is_expense(self) -> bool:
        return self in (CategoryType.NEED, CategoryType.WANT)


@dataclass
class Subcategory:
    """A line item inside a need/want category.

    Attributes:
        id: Unique identifier.
        name: Subcategory name (e.g. "Rent").
        priority: Lower numbers are more important.
        allocation_percentage: Share of the parent's recommended amount, 0-100.
        description: Human readable explanation.
        amount: Amount entered by the user, if any.
        is_selected: Whether the user picked this subcategory.
    """

    id: UUID
    name: str
    priority: int = 0
    allocation_percentage: float = 0.0
    description: str = ""
    amount: Optional[float] = None
    is_selected: bool = False


@dataclass
class Category:
    """A budget category of one of the four category types.

    Attributes:
        id: Unique identifier.
        name: Category name; percentage tables are keyed by it.
        type: debt, need, want or saving.
        priority: Lower numbers are more important.
        emoji: Display glyph.
        description: Human readable explanation.
        amount: Stored amount (debt balance, savings contribution, or the
            sum of selected subcategories for expenses).
        due_date: Payoff date, debt only.
        subcategories: Owned subcategories, need/want only.
        is_selected: Whether the category is part of the user's budget.
    """

    id: UUID
    name: str
    type: CategoryType
    priority: int = 0
    emoji: str = ""
    description: str = ""
    amount: Optional[float] = None
    due_date: Optional[date] = None
    subcategories: List[Subcategory] = field(default_factory=list)
    is_selected: bool = False

    @property
    def selected_subcategories(self) -> List[Subcategory]:
        return [sub for sub in self.subcategories if sub.is_selected]

    def find_subcategory(self, subcategory_id: UUID) -> Optional[Subcategory]:
        for sub in self.subcategories:
            if sub.id == subcategory_id:
                return sub
        return None

    def entity_ids(self) -> List[UUID]:
        """Get this category's id followed by all of its subcategory ids."""
        return [self.id] + [sub.id for sub in self.subcategories]


# Anything that can carry an allocation. Both variants expose id, name,
# amount and description.
BudgetItem = Union[Category, Subcategory]


def item_amount(item: BudgetItem) -> float:
    """Get the stored amount of a category or subcategory, 0 if unset."""
    return item.amount if item.amount is not None else 0.0


def item_label(item: BudgetItem) -> str:
    """Get a display label, prefixing categories with their emoji."""
    if isinstance(item, Category) and item.emoji:
        return f"{item.emoji} {item.name}"
    return item.name
