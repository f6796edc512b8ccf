"""Budget summary tool."""

from dataclasses import dataclass, field
from typing import Dict, List

from models.category import CategoryType

# Advisory limits, as fractions of monthly income
MAX_DEBT_RATIO = 0.36
MAX_HOUSING_RATIO = 0.28
EMERGENCY_FUND_MONTHS = 3


@dataclass
class BudgetSummary:
    """Entered-budget totals by category type plus advisory messages."""

    total_allocated: float = 0.0
    totals_by_type: Dict[CategoryType, float] = field(default_factory=dict)
    surplus_or_deficit: float = 0.0
    recommendations: List[str] = field(default_factory=list)

    @property
    def total_debts(self) -> float:
        return self.totals_by_type.get(CategoryType.DEBT, 0.0)

    @property
    def total_needs(self) -> float:
        return self.totals_by_type.get(CategoryType.NEED, 0.0)

    @property
    def total_wants(self) -> float:
        return self.totals_by_type.get(CategoryType.WANT, 0.0)

    @property
    def total_savings(self) -> float:
        return self.totals_by_type.get(CategoryType.SAVING, 0.0)


def get_budget_summary(services) -> BudgetSummary:
    """Summarize the current entered budget.

    Totals only count category-level entries. Recommendations are produced
    when debt payments exceed 36% of monthly income, when a selected
    Emergency Fund is below three months of income, and when selected
    Housing exceeds 28% of monthly income.

    Args:
        services: Services container with the catalog and allocation engine.

    Returns:
        BudgetSummary for the engine's current allocations.
    """
    engine = services.engine
    selected = services.categories.find_selected()
    monthly_income = engine.monthly_income

    totals = {category_type: 0.0 for category_type in CategoryType}
    for category in selected:
        totals[category.type] += engine.allocations.get(category.id, 0.0)

    recommendations = []

    if monthly_income > 0 and totals[CategoryType.DEBT] / monthly_income > MAX_DEBT_RATIO:
        recommendations.append(
            "Your debt payments are high. Consider debt consolidation or speaking "
            "with a financial advisor."
        )

    by_name = {c.name: c for c in selected}

    emergency_fund = by_name.get("Emergency Fund")
    if emergency_fund is not None and emergency_fund.id in engine.allocations:
        if engine.allocations[emergency_fund.id] < monthly_income * EMERGENCY_FUND_MONTHS:
            recommendations.append("Build your emergency fund to cover 3-6 months of expenses.")

    housing = by_name.get("Housing")
    if housing is not None and housing.id in engine.allocations:
        if engine.allocations[housing.id] > monthly_income * MAX_HOUSING_RATIO:
            recommendations.append(
                "Your housing costs exceed recommended limits. Consider ways to "
                "reduce these expenses."
            )

    return BudgetSummary(
        total_allocated=engine.total_allocated,
        totals_by_type=totals,
        surplus_or_deficit=engine.deficit_or_surplus,
        recommendations=recommendations,
    )
