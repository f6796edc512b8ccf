"""Affordability estimates for large purchases and savings goals."""

from affordability.calculator import (
    AffordabilityItem,
    HouseCheck,
    calculate_amount,
    check_house_price,
)

__all__ = ["AffordabilityItem", "HouseCheck", "calculate_amount", "check_house_price"]
