"""Budget plan loading.

A plan is a YAML document describing one user's budget: paycheck, cadence,
any custom categories, and which catalog categories and subcategories are
selected with what amounts. Example::

    paycheck: 2500
    cadence: Bi-Weekly
    add_categories:
      - name: Hobby Fund
        type: saving
        priority: 4
    selections:
      - name: Housing
        subcategories:
          - name: Rent
            amount: 1200
      - name: Credit Card Debt
        amount: 1200
        due_date: 2027-04-01
      - name: Hobby Fund
        amount: 50
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from models.cadence import PaymentCadence
from models.category import Category, CategoryType
from seed import CategorySeed
from logger import get_logger

logger = get_logger()


class SubcategorySelection(BaseModel):
    name: str
    amount: Optional[float] = Field(default=None, ge=0)


class CategorySelection(BaseModel):
    name: str
    amount: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    subcategories: List[SubcategorySelection] = Field(default_factory=list)


class BudgetPlan(BaseModel):
    """A user's budget inputs."""

    paycheck: float = Field(ge=0)
    cadence: PaymentCadence = PaymentCadence.MONTHLY
    add_categories: List[CategorySeed] = Field(default_factory=list)
    selections: List[CategorySelection] = Field(default_factory=list)

    @field_validator("cadence", mode="before")
    @classmethod
    def _parse_cadence(cls, value):
        if isinstance(value, str):
            return PaymentCadence.from_label(value)
        return value


class PlanService:
    """Service for loading budget plans and applying them to the catalog."""

    def __init__(self, categories):
        """Initialize the plan service.

        Args:
            categories: Category catalog service the plans are applied to.
        """
        self.categories = categories

    def load(self, plan_file: Path) -> BudgetPlan:
        """Load and validate a plan file.

        Raises:
            FileNotFoundError: If the plan file doesn't exist.
            pydantic.ValidationError: If the plan doesn't match the schema.
        """
        if not plan_file.exists():
            raise FileNotFoundError(f"Plan file not found: {plan_file}")

        logger.info(f"Loading budget plan from {plan_file}")

        with open(plan_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return BudgetPlan.model_validate(data)

    def apply(self, plan: BudgetPlan) -> List[Category]:
        """Create the plan's custom categories and record its selections.

        Returns:
            The catalog's selected categories after applying the plan.

        Raises:
            ValueError: If a selection names a category or subcategory that
                is not in the catalog.
        """
        for entry in plan.add_categories:
            if self.categories.find_by_name(entry.name):
                logger.debug(f"Category '{entry.name}' already in catalog")
                continue
            category = self.categories.create(
                entry.name,
                entry.type,
                priority=entry.priority,
                emoji=entry.emoji,
                description=entry.description,
                amount=entry.amount,
                due_date=entry.due_date,
            )
            for sub in entry.subcategories:
                self.categories.add_subcategory(
                    category.id,
                    sub.name,
                    priority=sub.priority,
                    allocation_percentage=sub.allocation_percentage,
                    description=sub.description,
                )

        for selection in plan.selections:
            self._apply_selection(selection)

        selected = self.categories.find_selected()
        logger.info(f"Plan applied: {len(selected)} categories selected")
        return selected

    def _apply_selection(self, selection: CategorySelection) -> None:
        category = self.categories.find_by_name(selection.name)
        if category is None:
            raise ValueError(f"Unknown category in plan: {selection.name}")

        self.categories.set_selected(category.id)

        for sub_selection in selection.subcategories:
            subcategory = next(
                (s for s in category.subcategories if s.name == sub_selection.name),
                None,
            )
            if subcategory is None:
                raise ValueError(
                    f"Unknown subcategory in plan: {selection.name}/{sub_selection.name}"
                )
            self.categories.set_subcategory_selected(category.id, subcategory.id)
            if sub_selection.amount is not None:
                self.categories.update_subcategory_amount(
                    category.id, subcategory.id, sub_selection.amount
                )

        if category.type == CategoryType.DEBT:
            if selection.amount is not None or selection.due_date is not None:
                self.categories.update_amount_and_due_date(
                    category.id, selection.amount, selection.due_date
                )
        elif selection.amount is not None:
            self.categories.update_amount(category.id, selection.amount)
