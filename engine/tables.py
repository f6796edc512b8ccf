"""Fixed percentage tables used to recommend allocations.

Category-level tables are fractions of monthly income (0-1). Subcategory
shares live on each Subcategory as ``allocation_percentage`` (0-100).
"""

from typing import Dict

from models.category import CategoryType

DEFAULT_PERCENTAGE = 0.05

EXPENSE_PERCENTAGES: Dict[str, float] = {
    "Housing": 0.30,
    "Transportation": 0.15,
    "Food": 0.12,
    "Healthcare": 0.10,
    "Utilities": 0.08,
    "Personal Care": 0.05,
    "Entertainment": 0.05,
    "Subscriptions": 0.03,
    "Education": 0.05,
    "Pets": 0.03,
}

# Canonical savings table. Retirement is 15% here; no other savings table is used.
SAVINGS_PERCENTAGES: Dict[str, float] = {
    "Emergency Fund": 0.10,
    "Vacation": 0.05,
    "New Car": 0.05,
    "Home Renovation": 0.07,
    "Investment": 0.10,
    "Wedding": 0.05,
    "Education Fund": 0.05,
    "Retirement": 0.15,
    "House Down Payment": 0.10,
    "College Fund": 0.10,
    "Gadgets": 0.03,
    "Charity": 0.05,
    "Business Investment": 0.10,
    "Clothing Fund": 0.03,
}

# 50/30/20 split of what is left after debt. Ordered need -> want -> saving.
PERFECT_BUDGET_RATIOS: Dict[CategoryType, float] = {
    CategoryType.NEED: 0.50,
    CategoryType.WANT: 0.30,
    CategoryType.SAVING: 0.20,
}


def expense_percentage(category_name: str) -> float:
    return EXPENSE_PERCENTAGES.get(category_name, DEFAULT_PERCENTAGE)


def savings_percentage(category_name: str) -> float:
    return SAVINGS_PERCENTAGES.get(category_name, DEFAULT_PERCENTAGE)


def recommended_expense_amount(category_name: str, monthly_income: float) -> float:
    """Recommended monthly amount for a need/want category."""
    return monthly_income * expense_percentage(category_name)


def recommended_savings_amount(category_name: str, income: float) -> float:
    """Recommended amount for a savings category against the given income base."""
    return income * savings_percentage(category_name)
