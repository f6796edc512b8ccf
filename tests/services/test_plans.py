import pytest
from datetime import date
from pydantic import ValidationError

from models.cadence import PaymentCadence
from models.category import CategoryType
from services.plans import BudgetPlan

PLAN_YAML = """
paycheck: 2500
cadence: bi-weekly
add_categories:
  - name: Hobby Fund
    type: saving
    priority: 4
selections:
  - name: Housing
    subcategories:
      - name: Rent
        amount: 1200
      - name: Utilities
        amount: 150
  - name: Credit Card Debt
    amount: 1200
    due_date: 2026-07-15
  - name: Hobby Fund
    amount: 50
"""


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "plan.yaml"
    path.write_text(PLAN_YAML)
    return path


class TestPlanService:
    """Tests for PlanService."""

    def test_load_plan(self, seeded_services, plan_file):
        """Test a YAML plan is parsed and validated."""
        plan = seeded_services.plans.load(plan_file)

        assert plan.paycheck == 2500
        assert plan.cadence == PaymentCadence.BI_WEEKLY
        assert plan.add_categories[0].type == CategoryType.SAVING
        assert plan.selections[1].due_date == date(2026, 7, 15)

    def test_load_missing_plan(self, seeded_services, tmp_path):
        """Test a missing plan file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            seeded_services.plans.load(tmp_path / "nope.yaml")

    def test_negative_paycheck_rejected(self):
        """Test a negative paycheck fails validation."""
        with pytest.raises(ValidationError):
            BudgetPlan.model_validate({"paycheck": -10})

    def test_unknown_cadence_rejected(self):
        """Test an unknown cadence label fails validation."""
        with pytest.raises(ValidationError):
            BudgetPlan.model_validate({"paycheck": 100, "cadence": "hourly"})

    def test_apply_plan(self, seeded_services, plan_file):
        """Test applying a plan selects and fills catalog entries."""
        catalog = seeded_services.categories
        plan = seeded_services.plans.load(plan_file)

        selected = seeded_services.plans.apply(plan)

        assert [c.name for c in selected] == [
            "Credit Card Debt",
            "Housing",
            "Hobby Fund",
        ]
        housing = catalog.find_by_name("Housing")
        assert housing.amount == 1350
        assert {s.name for s in housing.selected_subcategories} == {"Rent", "Utilities"}
        debt = catalog.find_by_name("Credit Card Debt")
        assert debt.amount == 1200
        assert debt.due_date == date(2026, 7, 15)
        assert catalog.find_by_name("Hobby Fund").amount == 50

    def test_applied_plan_drives_engine(self, seeded_services, plan_file):
        """Test a plan's income and selections flow into the allocation maps."""
        plan = seeded_services.plans.load(plan_file)
        seeded_services.plans.apply(plan)

        seeded_services.engine.set_income(plan.paycheck, plan.cadence)

        engine = seeded_services.engine
        debt = seeded_services.categories.find_by_name("Credit Card Debt")
        assert engine.allocations[debt.id] == pytest.approx(200 * 12 / 26)
        assert engine.total_allocated == pytest.approx(1350 + 50 + 200 * 12 / 26)

    def test_unknown_category_raises(self, seeded_services):
        """Test a selection naming an unknown category raises ValueError."""
        plan = BudgetPlan.model_validate(
            {"paycheck": 100, "selections": [{"name": "Yacht"}]}
        )

        with pytest.raises(ValueError, match="Unknown category"):
            seeded_services.plans.apply(plan)

    def test_unknown_subcategory_raises(self, seeded_services):
        """Test a selection naming an unknown subcategory raises ValueError."""
        plan = BudgetPlan.model_validate(
            {
                "paycheck": 100,
                "selections": [{"name": "Food", "subcategories": [{"name": "Caviar"}]}],
            }
        )

        with pytest.raises(ValueError, match="Unknown subcategory"):
            seeded_services.plans.apply(plan)
