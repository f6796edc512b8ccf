"""Deficit and surplus prioritization tools.

When the entered budget exceeds the paycheck, the least important selected
categories are flagged for reduction. When there is money left over, the most
important unselected categories are proposed as additions.
"""

from dataclasses import dataclass
from typing import List
from uuid import UUID

from models.category import Category, CategoryType
from logger import get_logger

logger = get_logger()


@dataclass
class AdditionPreview:
    """An unselected category proposed for a surplus, with its preview amount."""

    category: Category
    amount: float


@dataclass
class BudgetImpact:
    """Effect of adding a category to the budget.

    Attributes:
        change: "increase" when the addition raises total allocations.
        amount: Amount the category would be added with.
        new_balance: Deficit (negative) or surplus after the addition.
    """

    change: str
    amount: float
    new_balance: float


def highlighted_for_reduction(services) -> List[Category]:
    """Get the selected categories to reduce to cover a deficit.

    Categories are walked from the highest priority number (least important)
    down. Each category reached while part of the deficit is still uncovered
    is flagged, and its entered allocation is counted against the deficit.

    Args:
        services: Services container with the catalog and allocation engine.

    Returns:
        Flagged categories in walk order; empty when there is no deficit.
    """
    engine = services.engine
    balance = engine.deficit_or_surplus
    if balance >= 0:
        return []

    remaining_deficit = abs(balance)
    highlighted = []
    ordered = sorted(
        services.categories.find_selected(), key=lambda c: c.priority, reverse=True
    )
    for category in ordered:
        if remaining_deficit <= 0:
            break
        highlighted.append(category)
        remaining_deficit -= engine.allocations.get(category.id, 0.0)

    logger.debug(f"{len(highlighted)} categories flagged for a deficit of {abs(balance):.2f}")
    return highlighted


def is_highlighted_for_reduction(services, category_id: UUID) -> bool:
    return any(c.id == category_id for c in highlighted_for_reduction(services))


def preview_amount(services, category: Category) -> float:
    """Recommended amount for a category, capped at the current surplus."""
    engine = services.engine
    return min(engine.recommended_amount(category), engine.deficit_or_surplus)


def recommended_additions(services, limit: int = 3) -> List[AdditionPreview]:
    """Propose unselected non-debt categories to absorb a surplus.

    Args:
        services: Services container with the catalog and allocation engine.
        limit: Maximum number of proposals.

    Returns:
        Up to ``limit`` proposals, most important (lowest priority number)
        first; empty when the budget is in deficit.
    """
    if services.engine.deficit_or_surplus < 0:
        return []

    candidates = [
        c for c in services.categories.find_unselected() if c.type != CategoryType.DEBT
    ]
    candidates.sort(key=lambda c: c.priority)
    return [
        AdditionPreview(category=c, amount=preview_amount(services, c))
        for c in candidates[:limit]
    ]


def prioritized_categories(services, category_type: CategoryType) -> List[Category]:
    """Get selected categories of a type for display.

    Needs include wants. While in deficit the list is ordered least important
    first, matching the order categories get flagged for reduction.
    """
    if category_type == CategoryType.NEED:
        types = (CategoryType.NEED, CategoryType.WANT)
    else:
        types = (category_type,)
    categories = [c for c in services.categories.find_selected() if c.type in types]

    if services.engine.deficit_or_surplus < 0:
        return sorted(categories, key=lambda c: c.priority, reverse=True)
    return categories


def budget_impact(services, category: Category) -> BudgetImpact:
    """Preview how adding a category at its preview amount changes the balance."""
    engine = services.engine
    amount = preview_amount(services, category)
    change = "increase" if amount >= 0 else "decrease"
    new_balance = engine.paycheck_amount - (engine.total_allocated + amount)
    return BudgetImpact(change=change, amount=amount, new_balance=new_balance)


def add_recommended_category(services, category_id: UUID) -> Category:
    """Select a category at its preview amount and rebuild the allocations.

    Expense categories with subcategories get all of them selected, and the
    amount is split by their allocation percentages (evenly when those are
    all zero).

    Raises:
        ValueError: If category not found.
    """
    catalog = services.categories
    category = catalog.find(category_id)
    if category is None:
        raise ValueError(f"Category with ID {category_id} not found")

    amount = max(0.0, preview_amount(services, category))
    catalog.set_selected(category.id)

    if category.type.is_expense and category.subcategories:
        total_percentage = sum(s.allocation_percentage for s in category.subcategories)
        for subcategory in category.subcategories:
            if total_percentage > 0:
                share = amount * subcategory.allocation_percentage / total_percentage
            else:
                share = amount / len(category.subcategories)
            catalog.set_subcategory_selected(category.id, subcategory.id)
            catalog.update_subcategory_amount(category.id, subcategory.id, share)
    else:
        catalog.update_amount(category.id, amount)

    logger.info(f"Added '{category.name}' to the budget at {amount:.2f}")
    services.engine.recalculate()
    return category
