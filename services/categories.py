"""Category catalog service.

Holds the budget categories in catalog order. Identity comes from an injected
id factory so tests can use predictable ids. Every mutation is reported to
subscribed listeners as ``listener(action, category)``.
"""

from datetime import date
from pathlib import Path
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from models.category import Category, CategoryType, Subcategory, item_amount
from seed import load_seed_file
from logger import get_logger

logger = get_logger()

CatalogListener = Callable[[str, Category], None]


class CategoryService:
    """Service for managing budget categories and their subcategories."""

    def __init__(self, id_factory: Callable[[], UUID] = uuid4):
        """Initialize an empty catalog.

        Args:
            id_factory: Produces a new unique id for each category and
                subcategory.
        """
        self.id_factory = id_factory
        self._categories: List[Category] = []
        self._listeners: List[CatalogListener] = []

    def subscribe(self, listener: CatalogListener) -> None:
        self._listeners.append(listener)

    def _notify(self, action: str, category: Category) -> None:
        for listener in list(self._listeners):
            listener(action, category)

    def seed_from_file(self, seed_file: Path) -> int:
        """Create categories from a seed file, skipping names already present.

        Args:
            seed_file: Path to a JSON seed document.

        Returns:
            Number of categories created.
        """
        created_count = 0
        for entry in load_seed_file(seed_file):
            if self.find_by_name(entry.name):
                logger.debug(f"Skipped '{entry.name}' (already exists)")
                continue

            subcategories = [
                Subcategory(
                    id=self.id_factory(),
                    name=sub.name,
                    priority=sub.priority,
                    allocation_percentage=sub.allocation_percentage,
                    description=sub.description,
                )
                for sub in entry.subcategories
            ]
            self.create(
                entry.name,
                entry.type,
                priority=entry.priority,
                emoji=entry.emoji,
                description=entry.description,
                subcategories=subcategories,
                amount=entry.amount,
                due_date=entry.due_date,
            )
            created_count += 1

        logger.info(f"Seeded {created_count} categories from {seed_file.name}")
        return created_count

    # Queries

    def find_all(self, category_type: Optional[CategoryType] = None) -> List[Category]:
        """Get all categories in catalog order.

        Args:
            category_type: Optional type to filter by.
        """
        if category_type is None:
            return list(self._categories)
        return [c for c in self._categories if c.type == category_type]

    def find_selected(self) -> List[Category]:
        return [c for c in self._categories if c.is_selected]

    def find_unselected(self) -> List[Category]:
        return [c for c in self._categories if not c.is_selected]

    def find(self, category_id: UUID) -> Optional[Category]:
        """Get a single category by ID.

        Returns:
            Category object if found, None otherwise.
        """
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get the first category with the given (case-sensitive) name."""
        for category in self._categories:
            if category.name == name:
                return category
        return None

    def index_of(self, category_id: UUID) -> Optional[int]:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index
        return None

    def _require(self, category_id: UUID) -> Category:
        category = self.find(category_id)
        if category is None:
            raise ValueError(f"Category with ID {category_id} not found")
        return category

    def _require_subcategory(self, category: Category, subcategory_id: UUID) -> Subcategory:
        subcategory = category.find_subcategory(subcategory_id)
        if subcategory is None:
            raise ValueError(
                f"Subcategory with ID {subcategory_id} not found in '{category.name}'"
            )
        return subcategory

    # Category mutations

    def create(
        self,
        name: str,
        category_type: CategoryType,
        priority: int = 0,
        emoji: str = "",
        description: str = "",
        subcategories: Optional[List[Subcategory]] = None,
        amount: Optional[float] = None,
        due_date: Optional[date] = None,
        is_selected: bool = False,
    ) -> Category:
        """Create a new category with a fresh id and append it to the catalog.

        Returns:
            The created Category object.
        """
        category = Category(
            id=self.id_factory(),
            name=name,
            type=category_type,
            priority=priority,
            emoji=emoji,
            description=description,
            amount=amount,
            due_date=due_date,
            subcategories=list(subcategories or []),
            is_selected=is_selected,
        )
        return self.add(category)

    def add(self, category: Category) -> Category:
        """Append an already-built category to the catalog."""
        self._categories.append(category)
        logger.debug(f"Added category '{category.name}' ({category.type.value})")
        self._notify("added", category)
        return category

    def delete_at(self, index: int) -> Category:
        """Delete the category at a catalog position.

        Subcategories go with it.

        Raises:
            IndexError: If the position is out of range.
        """
        category = self._categories.pop(index)
        logger.info(f"Deleted category '{category.name}'")
        self._notify("deleted", category)
        return category

    def delete(self, category_id: UUID) -> bool:
        """Delete a category by ID.

        Returns:
            True if category was deleted, False if not found.
        """
        index = self.index_of(category_id)
        if index is None:
            return False
        self.delete_at(index)
        return True

    def update(
        self,
        category_id: UUID,
        name: str,
        emoji: str,
        description: str,
        category_type: CategoryType,
        priority: int,
    ) -> Category:
        """Replace a category's descriptive fields.

        Raises:
            ValueError: If category not found.
        """
        category = self._require(category_id)
        category.name = name
        category.emoji = emoji
        category.description = description
        category.type = category_type
        category.priority = priority
        self._notify("updated", category)
        return category

    def set_selected(self, category_id: UUID, selected: bool = True) -> Category:
        category = self._require(category_id)
        category.is_selected = selected
        self._notify("updated", category)
        return category

    def update_amount(self, category_id: UUID, amount: Optional[float]) -> Category:
        """Store a category amount.

        Expense categories that have subcategories keep their amount equal
        to the sum of their selected subcategories, so the stored value is
        re-derived right after.

        Raises:
            ValueError: If category not found.
        """
        category = self._require(category_id)
        category.amount = amount
        if category.type.is_expense and category.subcategories:
            category.amount = _selected_subcategory_total(category)
        logger.debug(f"Amount for '{category.name}' set to {category.amount}")
        self._notify("updated", category)
        return category

    def update_amount_and_due_date(
        self, category_id: UUID, amount: Optional[float], due_date: Optional[date]
    ) -> Category:
        """Store a debt balance and its payoff date.

        Raises:
            ValueError: If category not found.
        """
        category = self._require(category_id)
        category.amount = amount
        category.due_date = due_date
        logger.debug(f"'{category.name}' set to {amount} due {due_date}")
        self._notify("updated", category)
        return category

    def update_expense_totals(self) -> None:
        """Re-derive every expense category's amount from its subcategories."""
        for category in self._categories:
            if category.type.is_expense and category.subcategories:
                category.amount = _selected_subcategory_total(category)

    # Subcategory mutations

    def add_subcategory(
        self,
        category_id: UUID,
        name: str,
        priority: int = 0,
        allocation_percentage: float = 0.0,
        description: str = "",
        amount: Optional[float] = None,
        is_selected: bool = False,
    ) -> Subcategory:
        """Create a subcategory under an existing category.

        Raises:
            ValueError: If category not found.
        """
        category = self._require(category_id)
        subcategory = Subcategory(
            id=self.id_factory(),
            name=name,
            priority=priority,
            allocation_percentage=allocation_percentage,
            description=description,
            amount=amount,
            is_selected=is_selected,
        )
        category.subcategories.append(subcategory)
        logger.debug(f"Added subcategory '{name}' to '{category.name}'")
        self._notify("updated", category)
        return subcategory

    def delete_subcategory(self, category_id: UUID, subcategory_id: UUID) -> bool:
        """Remove a subcategory.

        Returns:
            True if it was removed, False if either id was not found.
        """
        category = self.find(category_id)
        if category is None:
            return False
        subcategory = category.find_subcategory(subcategory_id)
        if subcategory is None:
            return False
        category.subcategories.remove(subcategory)
        logger.debug(f"Removed subcategory '{subcategory.name}' from '{category.name}'")
        self._notify("updated", category)
        return True

    def set_subcategory_selected(
        self, category_id: UUID, subcategory_id: UUID, selected: bool = True
    ) -> Subcategory:
        category = self._require(category_id)
        subcategory = self._require_subcategory(category, subcategory_id)
        subcategory.is_selected = selected
        if category.type.is_expense:
            category.amount = _selected_subcategory_total(category)
        self._notify("updated", category)
        return subcategory

    def update_subcategory_amount(
        self, category_id: UUID, subcategory_id: UUID, amount: Optional[float]
    ) -> Category:
        """Store a subcategory amount and refresh the parent total.

        Returns:
            The parent category.

        Raises:
            ValueError: If either id is not found.
        """
        category = self._require(category_id)
        subcategory = self._require_subcategory(category, subcategory_id)
        subcategory.amount = amount
        category.amount = _selected_subcategory_total(category)
        logger.debug(
            f"'{category.name}/{subcategory.name}' set to {amount}, "
            f"category total {category.amount}"
        )
        self._notify("updated", category)
        return category


def _selected_subcategory_total(category: Category) -> float:
    return sum(item_amount(sub) for sub in category.selected_subcategories)
