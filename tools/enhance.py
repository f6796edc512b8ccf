"""Budget enhancement suggestions.

Three kinds of suggestions are produced against the raw paycheck amount:
essential savings categories the user has not selected, selected categories
whose entered amount is far from the suggested one, and low-priority wants
that could be trimmed.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from models.category import Category, CategoryType

ADJUSTMENT_THRESHOLD = 0.20
REDUCTION_FACTOR = 0.70
REDUCIBLE_PRIORITY = 3

ENHANCE_PERCENTAGES = {
    "Housing": 0.30,
    "Transportation": 0.15,
    "Food": 0.12,
    "Healthcare": 0.10,
    "Utilities": 0.08,
    "Emergency Fund": 0.10,
    "Retirement": 0.15,
}
DEFAULT_ENHANCE_PERCENTAGE = 0.05

# (name, priority, share of paycheck, reason)
ESSENTIAL_SAVINGS = [
    (
        "Emergency Fund",
        1,
        0.10,
        "Having 3-6 months of expenses saved is crucial for financial security.",
    ),
    (
        "Retirement",
        1,
        0.15,
        "Starting retirement savings early is key to long-term financial success.",
    ),
    (
        "House Down Payment",
        2,
        0.10,
        "Saving for a home down payment can help you build equity and reduce "
        "monthly payments.",
    ),
    (
        "Investment",
        2,
        0.08,
        "Building an investment portfolio helps grow your wealth over time.",
    ),
]


@dataclass
class CategoryRecommendation:
    """A suggested change to one category.

    Attributes:
        kind: "add", "adjust" or "reduce".
        category_name: Name of the category concerned.
        category_type: Type of the category concerned.
        current_amount: Entered allocation, None for additions.
        recommended_amount: Suggested amount per paycheck.
        reason: Human readable explanation.
        priority: Priority of the category.
    """

    kind: str
    category_name: str
    category_type: CategoryType
    current_amount: Optional[float]
    recommended_amount: float
    reason: str
    priority: int


def enhance_amount(services, category: Category) -> float:
    return services.engine.paycheck_amount * ENHANCE_PERCENTAGES.get(
        category.name, DEFAULT_ENHANCE_PERCENTAGE
    )


def missing_essentials(services) -> List[CategoryRecommendation]:
    selected_names = {c.name for c in services.categories.find_selected()}
    paycheck = services.engine.paycheck_amount
    return [
        CategoryRecommendation(
            kind="add",
            category_name=name,
            category_type=CategoryType.SAVING,
            current_amount=None,
            recommended_amount=paycheck * share,
            reason=reason,
            priority=priority,
        )
        for name, priority, share, reason in ESSENTIAL_SAVINGS
        if name not in selected_names
    ]


def category_adjustments(services) -> List[CategoryRecommendation]:
    """Selected categories whose entered amount is more than 20% off."""
    engine = services.engine
    adjustments = []
    for category in services.categories.find_selected():
        recommended = enhance_amount(services, category)
        if recommended <= 0:
            continue
        current = engine.allocations.get(category.id, 0.0)
        if abs(current - recommended) / recommended <= ADJUSTMENT_THRESHOLD:
            continue
        reason = (
            "Consider increasing this category"
            if current < recommended
            else "This category might be over-allocated"
        )
        adjustments.append(
            CategoryRecommendation(
                kind="adjust",
                category_name=category.name,
                category_type=category.type,
                current_amount=current,
                recommended_amount=recommended,
                reason=reason,
                priority=category.priority,
            )
        )
    return adjustments


def reduction_suggestions(services) -> List[CategoryRecommendation]:
    engine = services.engine
    return [
        CategoryRecommendation(
            kind="reduce",
            category_name=category.name,
            category_type=category.type,
            current_amount=engine.allocations.get(category.id, 0.0),
            recommended_amount=enhance_amount(services, category) * REDUCTION_FACTOR,
            reason="Non-essential expense that could be reduced",
            priority=category.priority,
        )
        for category in services.categories.find_selected()
        if category.type == CategoryType.WANT and category.priority > REDUCIBLE_PRIORITY
    ]


def enhance_budget(services) -> Dict[str, List[CategoryRecommendation]]:
    """Collect every enhancement suggestion.

    Reductions are only suggested while the budget is in deficit.

    Returns:
        Dictionary with "add", "adjust" and "reduce" lists.
    """
    reductions = []
    if services.engine.deficit_or_surplus < 0:
        reductions = reduction_suggestions(services)
    return {
        "add": missing_essentials(services),
        "adjust": category_adjustments(services),
        "reduce": reductions,
    }
