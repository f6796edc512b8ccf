"""Allocation engine.

Computes three parallel maps from category/subcategory id to amount:

* ``allocations`` - the user's entered budget, per paycheck.
* ``recommended_allocations`` - percentage-table suggestions against monthly
  income.
* ``perfect_allocations`` - a 50/30/20 redistribution of the paycheck with
  debt held constant.

Each ``calculate_*`` call clears its map and rebuilds it from the categories
passed in. The maps are derived state and are never merged incrementally,
except by ``update_subcategory_amount`` which keeps the parent total equal to
the sum of its selected subcategories.
"""

from datetime import date
from typing import Callable, Dict, Iterable, List, Set
from uuid import UUID

from engine.debt import monthly_debt_allocation
from engine.tables import (
    PERFECT_BUDGET_RATIOS,
    recommended_expense_amount,
    recommended_savings_amount,
)
from models.cadence import PaymentCadence
from models.category import Category, CategoryType, item_amount
from logger import get_logger

logger = get_logger()

AllocationListener = Callable[["AllocationEngine"], None]


class AllocationEngine:
    """Budget allocation calculator bound to a category catalog.

    Args:
        categories: Category catalog service; only its selected categories
            take part in ``recalculate``.
        paycheck_amount: Amount received per paycheck.
        cadence: How often the paycheck arrives.
        clock: Returns today's date; used for debt amortization.
    """

    def __init__(
        self,
        categories,
        paycheck_amount: float = 0.0,
        cadence: PaymentCadence = PaymentCadence.MONTHLY,
        clock: Callable[[], date] = date.today,
    ):
        self.categories = categories
        self.paycheck_amount = paycheck_amount
        self.cadence = cadence
        self.clock = clock

        self.allocations: Dict[UUID, float] = {}
        self.recommended_allocations: Dict[UUID, float] = {}
        self.perfect_allocations: Dict[UUID, float] = {}

        # Subcategory keys in ``allocations``; their amounts are already
        # included in the parent category's entry.
        self._component_ids: Set[UUID] = set()
        self._listeners: List[AllocationListener] = []

        # Deletes made directly on the catalog still cascade into the maps.
        categories.subscribe(self._on_catalog_change)

    # Change notification

    def subscribe(self, listener: AllocationListener) -> None:
        """Register a callback invoked after the maps change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: AllocationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _on_catalog_change(self, action: str, category: Category) -> None:
        if action != "deleted":
            return
        self._drop_entries(category)
        logger.debug(f"Dropped allocations for deleted category '{category.name}'")
        self.recalculate()

    def _drop_entries(self, category: Category) -> None:
        for entity_id in category.entity_ids():
            self.allocations.pop(entity_id, None)
            self.recommended_allocations.pop(entity_id, None)
            self.perfect_allocations.pop(entity_id, None)
            self._component_ids.discard(entity_id)

    # Income

    @property
    def monthly_income(self) -> float:
        return self.cadence.to_monthly(self.paycheck_amount)

    def set_income(self, paycheck_amount: float, cadence: PaymentCadence) -> None:
        """Change the paycheck and cadence, then rebuild every map."""
        self.paycheck_amount = paycheck_amount
        self.cadence = cadence
        logger.debug(f"Income set to {paycheck_amount:.2f} ({cadence.value})")
        self.recalculate()

    # Map computation

    def calculate_allocations(self, selected_categories: Iterable[Category]) -> None:
        """Rebuild the entered-budget map.

        Debt is amortized over the months left until its due date and
        converted to a per-paycheck figure; debt without both an amount and a
        due date is skipped. Savings use the stored amount as-is. Expenses are
        the sum of their selected subcategories, each of which is also
        written under its own id.
        """
        self.allocations.clear()
        self._component_ids.clear()
        today = self.clock()

        for category in selected_categories:
            if category.type == CategoryType.DEBT:
                if category.amount is None or category.due_date is None:
                    continue
                monthly = monthly_debt_allocation(category.amount, category.due_date, today)
                self.allocations[category.id] = self.cadence.to_per_paycheck(monthly)

            elif category.type == CategoryType.SAVING:
                self.allocations[category.id] = item_amount(category)

            else:
                total = 0.0
                for subcategory in category.selected_subcategories:
                    amount = item_amount(subcategory)
                    self.allocations[subcategory.id] = amount
                    self._component_ids.add(subcategory.id)
                    total += amount
                self.allocations[category.id] = total

        logger.debug(f"Calculated {len(self.allocations)} allocation entries")

    def calculate_recommended_allocations(self, selected_categories: Iterable[Category]) -> None:
        """Rebuild the recommended map from the percentage tables.

        Debt gets no recommendation.
        """
        self.recommended_allocations.clear()
        monthly_income = self.monthly_income

        for category in selected_categories:
            if category.type.is_expense:
                recommended = recommended_expense_amount(category.name, monthly_income)
                self.recommended_allocations[category.id] = recommended
                for subcategory in category.selected_subcategories:
                    self.recommended_allocations[subcategory.id] = recommended * (
                        subcategory.allocation_percentage / 100
                    )
            elif category.type == CategoryType.SAVING:
                self.recommended_allocations[category.id] = recommended_savings_amount(
                    category.name, monthly_income
                )

        logger.debug(
            f"Calculated {len(self.recommended_allocations)} recommended entries "
            f"from monthly income {monthly_income:.2f}"
        )

    def calculate_perfect_budget(self, selected_categories: Iterable[Category]) -> None:
        """Rebuild the perfect-budget map.

        Debt keeps its stored amount and is taken off the paycheck first.
        Needs and wants split their 50% / 30% share of the remainder evenly
        across categories, then evenly across selected subcategories. Savings
        use the savings table against the raw paycheck amount. A share whose
        type has no selected categories is left unallocated.
        """
        self.perfect_allocations.clear()
        selected = list(selected_categories)
        remaining = self.paycheck_amount

        for category in selected:
            if category.type == CategoryType.DEBT:
                amount = item_amount(category)
                self.perfect_allocations[category.id] = amount
                remaining -= amount

        remaining = max(0.0, remaining)

        for category_type, ratio in PERFECT_BUDGET_RATIOS.items():
            typed = [c for c in selected if c.type == category_type]
            if not typed:
                continue

            if category_type == CategoryType.SAVING:
                for category in typed:
                    self.perfect_allocations[category.id] = recommended_savings_amount(
                        category.name, self.paycheck_amount
                    )
                continue

            category_share = remaining * ratio / len(typed)
            for category in typed:
                self.perfect_allocations[category.id] = category_share
                subcategories = category.selected_subcategories
                if not subcategories:
                    continue
                subcategory_share = category_share / len(subcategories)
                for subcategory in subcategories:
                    self.perfect_allocations[subcategory.id] = subcategory_share

        logger.debug(f"Calculated {len(self.perfect_allocations)} perfect-budget entries")

    def recalculate(self) -> None:
        """Rebuild all three maps from the catalog's selected categories."""
        selected = self.categories.find_selected()
        self.calculate_allocations(selected)
        self.calculate_recommended_allocations(selected)
        self.calculate_perfect_budget(selected)
        self._notify()

    # Derived figures

    def recommended_amount(self, category: Category) -> float:
        """Category-level recommended amount, without touching any map.

        Debt has no recommendation and yields 0.
        """
        if category.type.is_expense:
            return recommended_expense_amount(category.name, self.monthly_income)
        if category.type == CategoryType.SAVING:
            return recommended_savings_amount(category.name, self.monthly_income)
        return 0.0

    @property
    def total_allocated(self) -> float:
        """Sum of category-level entered allocations.

        This is not a plain sum over ``allocations``: subcategory entries are
        already part of their parent's entry and are left out, so an expense
        with subcategories is counted once.
        """
        return sum(
            amount
            for entity_id, amount in self.allocations.items()
            if entity_id not in self._component_ids
        )

    @property
    def deficit_or_surplus(self) -> float:
        """Paycheck minus total entered allocations; negative is a deficit."""
        return self.paycheck_amount - self.total_allocated

    # Catalog edits

    def update_category_amount(self, category_id: UUID, amount: float) -> Category:
        """Store a new category amount and rebuild every map."""
        category = self.categories.update_amount(category_id, amount)
        self.recalculate()
        return category

    def update_subcategory_amount(
        self, category_id: UUID, subcategory_id: UUID, amount: float
    ) -> Category:
        """Store a new subcategory amount and refresh the parent's total.

        When both the category and the subcategory are selected only the two
        affected entries of the entered-budget map change. Otherwise every
        map is rebuilt, so unselected entries never appear.
        """
        category = self.categories.update_subcategory_amount(
            category_id, subcategory_id, amount
        )
        subcategory = category.find_subcategory(subcategory_id)
        if not (category.is_selected and subcategory.is_selected):
            self.recalculate()
            return category

        self.allocations[subcategory_id] = item_amount(subcategory)
        self._component_ids.add(subcategory_id)
        self.allocations[category.id] = sum(
            item_amount(sub) for sub in category.selected_subcategories
        )
        self._notify()
        return category

    def add_category(self, category: Category) -> Category:
        """Add a category to the catalog and rebuild every map."""
        added = self.categories.add(category)
        self.recalculate()
        return added

    def remove_category(self, category_id: UUID) -> bool:
        """Delete a category and drop it and its subcategories from every map.

        The cascade runs from the catalog's "deleted" notification.

        Returns:
            True if the category existed.
        """
        return self.categories.delete(category_id)

    def remove_category_at(self, index: int) -> Category:
        """Delete the category at a catalog position, cascading like remove_category.

        Raises:
            IndexError: If the position is out of range.
        """
        return self.categories.delete_at(index)
