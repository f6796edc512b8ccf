"""Affordability estimates.

Given an annual income and a set of assumptions, estimate what the user can
afford (house, car) or what a goal will cost (vacation, wedding, education,
emergency fund), or the monthly saving a goal needs (retirement).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from affordability.assumptions.loader import AssumptionsManager
from logger import get_logger

logger = get_logger()

# Housing ratios: front-end and back-end debt-to-income limits
FRONT_END_RATIO = 0.28
BACK_END_RATIO = 0.36
PEAK_WEDDING_MONTHS = ("June", "September", "October")
PEAK_WEDDING_MULTIPLIER = 1.2
PLANNING_AGE = 95

HOUSE_CHECK = {
    "max_debt_ratio": 0.28,
    "down_payment_percent": 0.20,
    "property_tax_rate": 0.015,
    "insurance_rate": 0.005,
    "maintenance_rate": 0.01,
    "interest_rate": 0.065,
    "loan_term_years": 30,
}


class AffordabilityItem(Enum):
    HOUSE = "house"
    CAR = "car"
    VACATION = "vacation"
    WEDDING = "wedding"
    EDUCATION = "education"
    RETIREMENT = "retirement"
    EMERGENCY_FUND = "emergency_fund"

    @classmethod
    def from_name(cls, name: str) -> "AffordabilityItem":
        normalized = name.strip().lower().replace("-", "_").replace(" ", "_")
        for item in cls:
            if item.value == normalized:
                return item
        raise ValueError(f"Unknown affordability item: {name}")


@dataclass
class HouseCheck:
    """Result of checking a home price against an income."""

    required_income: float
    monthly_payment: float
    down_payment: float
    is_affordable: bool


def present_value_factor(monthly_rate: float, payments: float) -> float:
    """Loan principal supported by a payment of 1 per month.

    Falls back to the number of payments when the rate is zero.
    """
    if monthly_rate == 0:
        return payments
    growth = (1 + monthly_rate) ** payments
    return (growth - 1) / (monthly_rate * growth)


def monthly_payment(principal: float, monthly_rate: float, payments: float) -> float:
    """Fixed monthly payment that amortizes a loan."""
    return principal / present_value_factor(monthly_rate, payments)


def _house(annual_income: float, a: Dict[str, Any]) -> float:
    max_monthly = min(
        annual_income * FRONT_END_RATIO / 12,
        annual_income * BACK_END_RATIO / 12 - float(a["monthly_debt_payments"]),
    )
    max_monthly = max(0.0, max_monthly)
    factor = present_value_factor(
        float(a["interest_rate"]) / 12, float(a["loan_term_years"]) * 12
    )
    return max_monthly * factor + float(a["down_payment_saved"])


def _car(annual_income: float, a: Dict[str, Any]) -> float:
    factor = present_value_factor(
        float(a["interest_rate"]) / 12, float(a["loan_term_years"]) * 12
    )
    return (
        float(a["monthly_budget_for_payment"]) * factor
        + float(a["down_payment_amount"])
        + float(a["trade_in_value"])
    )


def _vacation(annual_income: float, a: Dict[str, Any]) -> float:
    per_traveler = float(a["flight_cost_per_person"]) + float(
        a["daily_budget_per_person"]
    ) * int(a["trip_duration_days"])
    return int(a["number_of_travelers"]) * per_traveler + float(a["buffer_for_activities"])


def _wedding(annual_income: float, a: Dict[str, Any]) -> float:
    base = (
        int(a["guest_count"]) * float(a["cost_per_guest"])
        + float(a["venue_budget"])
        + float(a["additional_services_budget"])
    )
    if str(a["month_of_wedding"]) in PEAK_WEDDING_MONTHS:
        return base * PEAK_WEDDING_MULTIPLIER
    return base


def _education(annual_income: float, a: Dict[str, Any]) -> float:
    yearly = (
        float(a["annual_tuition"])
        + float(a["annual_room_and_board"])
        + float(a["books_and_supplies_per_year"])
    )
    increase = float(a["annual_increase_rate"])
    return sum(yearly * (1 + increase) ** year for year in range(int(a["years_of_education"])))


def _retirement(annual_income: float, a: Dict[str, Any]) -> float:
    current_age = int(a["current_age"])
    retirement_age = int(a["retirement_age"])
    if retirement_age <= current_age:
        raise ValueError("Retirement age must be after current age")

    return_rate = float(a["expected_return_rate"])
    inflation = float(a["inflation_rate"])
    years_to_retirement = retirement_age - current_age
    years_in_retirement = PLANNING_AGE - retirement_age
    real_rate = (1 + return_rate) / (1 + inflation) - 1

    future_need = float(a["desired_annual_income"]) * (1 + inflation) ** years_to_retirement
    if real_rate == 0:
        annuity_factor = years_in_retirement
    else:
        annuity_factor = (1 - (1 + real_rate) ** -years_in_retirement) / real_rate
    total_needed = future_need * annuity_factor

    monthly_rate = return_rate / 12
    months = years_to_retirement * 12
    if monthly_rate == 0:
        savings_factor = months
    else:
        savings_factor = ((1 + monthly_rate) ** months - 1) / monthly_rate
    return total_needed / savings_factor


def _emergency_fund(annual_income: float, a: Dict[str, Any]) -> float:
    monthly_expenses = (
        float(a["monthly_housing_cost"])
        + float(a["monthly_utilities"])
        + float(a["monthly_food_budget"])
        + float(a["monthly_insurance_premiums"])
    )
    return monthly_expenses * int(a["months_of_coverage"])


_CALCULATIONS = {
    AffordabilityItem.HOUSE: _house,
    AffordabilityItem.CAR: _car,
    AffordabilityItem.VACATION: _vacation,
    AffordabilityItem.WEDDING: _wedding,
    AffordabilityItem.EDUCATION: _education,
    AffordabilityItem.RETIREMENT: _retirement,
    AffordabilityItem.EMERGENCY_FUND: _emergency_fund,
}


def calculate_amount(
    item: AffordabilityItem,
    annual_income: float,
    overrides: Optional[Dict[str, Any]] = None,
    manager: Optional[AssumptionsManager] = None,
) -> float:
    """Estimate an affordability figure for one item.

    Args:
        item: What to estimate.
        annual_income: Yearly income; only house uses it directly.
        overrides: Assumption values replacing the item's defaults.
        manager: Source of default assumptions. Defaults to the bundled files.

    Returns:
        Affordable price for house and car, monthly saving for retirement,
        total cost for the other items.

    Raises:
        ValueError: If the assumptions are inconsistent.
    """
    manager = manager or AssumptionsManager()
    assumptions = manager.resolve(item.value, overrides)
    amount = _CALCULATIONS[item](annual_income, assumptions)
    logger.debug(f"Affordability for {item.value}: {amount:.2f}")
    return amount


def check_house_price(price: float, annual_income: float) -> HouseCheck:
    """Check whether a home price fits an income.

    Uses 20% down, a 30-year loan at 6.5%, and yearly property tax,
    insurance and maintenance of 1.5%, 0.5% and 1% of the price. The
    required income keeps the full monthly cost at 28% of gross income.
    """
    down_payment = price * HOUSE_CHECK["down_payment_percent"]
    principal_and_interest = monthly_payment(
        price - down_payment,
        HOUSE_CHECK["interest_rate"] / 12,
        HOUSE_CHECK["loan_term_years"] * 12,
    )
    yearly_costs = price * (
        HOUSE_CHECK["property_tax_rate"]
        + HOUSE_CHECK["insurance_rate"]
        + HOUSE_CHECK["maintenance_rate"]
    )
    total_monthly = principal_and_interest + yearly_costs / 12
    required_income = total_monthly / HOUSE_CHECK["max_debt_ratio"] * 12

    return HouseCheck(
        required_income=required_income,
        monthly_payment=total_monthly,
        down_payment=down_payment,
        is_affordable=required_income <= annual_income,
    )
