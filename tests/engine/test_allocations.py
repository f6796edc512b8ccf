import pytest
from datetime import date

from dateutil.relativedelta import relativedelta

from models.cadence import PaymentCadence
from models.category import Category, CategoryType
from engine.tables import recommended_expense_amount, recommended_savings_amount

TODAY = date(2026, 1, 15)


def add_housing(services, rent=None, mortgage=None):
    """Create a selected Housing category with Rent and Mortgage subcategories."""
    catalog = services.categories
    housing = catalog.create("Housing", CategoryType.NEED, priority=1, is_selected=True)
    rent_sub = catalog.add_subcategory(housing.id, "Rent", allocation_percentage=30.0)
    mortgage_sub = catalog.add_subcategory(
        housing.id, "Mortgage", allocation_percentage=25.0
    )
    if rent is not None:
        catalog.set_subcategory_selected(housing.id, rent_sub.id)
        catalog.update_subcategory_amount(housing.id, rent_sub.id, rent)
    if mortgage is not None:
        catalog.set_subcategory_selected(housing.id, mortgage_sub.id)
        catalog.update_subcategory_amount(housing.id, mortgage_sub.id, mortgage)
    return housing, rent_sub, mortgage_sub


class TestPercentageTables:
    """Tests for the recommendation tables."""

    def test_housing_recommendation(self):
        """Test Housing is 30% of monthly income."""
        assert recommended_expense_amount("Housing", 5000) == pytest.approx(1500)

    def test_unknown_name_defaults_to_five_percent(self):
        """Test names missing from the table fall back to 5%."""
        assert recommended_expense_amount("Llama Grooming", 2000) == pytest.approx(100)
        assert recommended_savings_amount("Space Trip", 2000) == pytest.approx(100)

    def test_retirement_is_fifteen_percent(self):
        """Test the savings table used for Retirement."""
        assert recommended_savings_amount("Retirement", 4000) == pytest.approx(600)


class TestCalculateAllocations:
    """Tests for the entered-budget map."""

    def test_debt_amortized_per_paycheck(self, services):
        """Test debt is spread over the months left and converted to per paycheck."""
        debt = services.categories.create(
            "Credit Card Debt",
            CategoryType.DEBT,
            amount=1200,
            due_date=TODAY + relativedelta(months=6),
            is_selected=True,
        )

        services.engine.set_income(2000, PaymentCadence.BI_WEEKLY)

        assert services.engine.allocations[debt.id] == pytest.approx(200 * 12 / 26)

    def test_debt_past_due_allocates_full_amount(self, services):
        """Test a past-due debt is allocated in full."""
        debt = services.categories.create(
            "Tax Debt",
            CategoryType.DEBT,
            amount=900,
            due_date=TODAY - relativedelta(months=2),
            is_selected=True,
        )

        services.engine.set_income(3000, PaymentCadence.MONTHLY)

        assert services.engine.allocations[debt.id] == pytest.approx(900)

    def test_debt_without_due_date_is_skipped(self, services):
        """Test debt missing a due date gets no entry."""
        debt = services.categories.create(
            "Payday Loan", CategoryType.DEBT, amount=500, is_selected=True
        )

        services.engine.set_income(3000, PaymentCadence.MONTHLY)

        assert debt.id not in services.engine.allocations

    def test_saving_uses_stored_amount(self, services):
        """Test savings allocations are the stored amount as-is."""
        saving = services.categories.create(
            "Vacation", CategoryType.SAVING, amount=75, is_selected=True
        )

        services.engine.set_income(1000, PaymentCadence.WEEKLY)

        assert services.engine.allocations[saving.id] == 75

    def test_saving_without_amount_is_zero(self, services):
        """Test a missing savings amount is treated as zero."""
        saving = services.categories.create(
            "Wedding", CategoryType.SAVING, is_selected=True
        )

        services.engine.set_income(1000, PaymentCadence.MONTHLY)

        assert services.engine.allocations[saving.id] == 0

    def test_expense_sums_selected_subcategories(self, services):
        """Test an expense is the sum of its selected subcategories only."""
        housing, rent, mortgage = add_housing(services, rent=1200)

        services.engine.set_income(3000, PaymentCadence.MONTHLY)

        allocations = services.engine.allocations
        assert allocations[housing.id] == 1200
        assert allocations[rent.id] == 1200
        assert mortgage.id not in allocations

    def test_unselected_categories_are_ignored(self, services):
        """Test unselected categories never appear in the maps."""
        saving = services.categories.create("Vacation", CategoryType.SAVING, amount=75)

        services.engine.set_income(1000, PaymentCadence.MONTHLY)

        assert saving.id not in services.engine.allocations
        assert saving.id not in services.engine.recommended_allocations
        assert saving.id not in services.engine.perfect_allocations

    def test_recalculate_clears_previous_entries(self, services):
        """Test rebuilding drops entries for categories no longer selected."""
        saving = services.categories.create(
            "Vacation", CategoryType.SAVING, amount=75, is_selected=True
        )
        services.engine.set_income(1000, PaymentCadence.MONTHLY)

        services.categories.set_selected(saving.id, False)
        services.engine.recalculate()

        assert services.engine.allocations == {}


class TestRecommendedAllocations:
    """Tests for the recommended map."""

    def test_expense_and_subcategory_recommendations(self, services):
        """Test subcategories get their percentage of the category recommendation."""
        housing, rent, _ = add_housing(services, rent=1000)

        services.engine.set_income(5000, PaymentCadence.MONTHLY)

        recommended = services.engine.recommended_allocations
        assert recommended[housing.id] == pytest.approx(1500)
        assert recommended[rent.id] == pytest.approx(450)

    def test_recommendations_use_monthly_income(self, services):
        """Test recommendations are computed against monthly income."""
        saving = services.categories.create(
            "Emergency Fund", CategoryType.SAVING, is_selected=True
        )

        services.engine.set_income(1200, PaymentCadence.BI_WEEKLY)

        assert services.engine.recommended_allocations[saving.id] == pytest.approx(
            2600 * 0.10
        )

    def test_debt_has_no_recommendation(self, services):
        """Test debt gets no recommended entry."""
        debt = services.categories.create(
            "Student Loan",
            CategoryType.DEBT,
            amount=1000,
            due_date=TODAY + relativedelta(months=10),
            is_selected=True,
        )

        services.engine.set_income(3000, PaymentCadence.MONTHLY)

        assert debt.id not in services.engine.recommended_allocations
        assert services.engine.recommended_amount(debt) == 0


class TestPerfectBudget:
    """Tests for the 50/30/20 map."""

    def test_fifty_thirty_twenty_after_debt(self, services):
        """Test needs split 50% of the paycheck left after debt."""
        catalog = services.categories
        debt = catalog.create(
            "Credit Card Debt",
            CategoryType.DEBT,
            amount=300,
            due_date=TODAY + relativedelta(months=1),
            is_selected=True,
        )
        need = catalog.create("Food", CategoryType.NEED, is_selected=True)
        saving = catalog.create("Vacation", CategoryType.SAVING, is_selected=True)

        services.engine.set_income(3000, PaymentCadence.MONTHLY)

        perfect = services.engine.perfect_allocations
        assert perfect[debt.id] == 300
        assert perfect[need.id] == pytest.approx(1350)
        assert perfect[saving.id] == pytest.approx(150)

    def test_share_split_evenly_and_across_subcategories(self, services):
        """Test each type's share is split evenly, then across subcategories."""
        housing, rent, mortgage = add_housing(services, rent=1000, mortgage=500)
        food = services.categories.create("Food", CategoryType.NEED, is_selected=True)
        fun = services.categories.create(
            "Entertainment", CategoryType.WANT, is_selected=True
        )

        services.engine.set_income(4000, PaymentCadence.MONTHLY)

        perfect = services.engine.perfect_allocations
        assert perfect[housing.id] == pytest.approx(1000)
        assert perfect[food.id] == pytest.approx(1000)
        assert perfect[rent.id] == pytest.approx(500)
        assert perfect[mortgage.id] == pytest.approx(500)
        assert perfect[fun.id] == pytest.approx(1200)

    def test_debt_larger_than_paycheck_leaves_nothing(self, services):
        """Test the remainder after debt never goes negative."""
        services.categories.create(
            "Personal Loan",
            CategoryType.DEBT,
            amount=5000,
            due_date=TODAY + relativedelta(months=1),
            is_selected=True,
        )
        need = services.categories.create("Food", CategoryType.NEED, is_selected=True)

        services.engine.set_income(3000, PaymentCadence.MONTHLY)

        assert services.engine.perfect_allocations[need.id] == 0


class TestTotalsAndEdits:
    """Tests for totals and engine-driven catalog edits."""

    def test_total_allocated_counts_categories_once(self, services):
        """Test subcategory entries are not added on top of their parent."""
        add_housing(services, rent=1000, mortgage=200)
        services.categories.create(
            "Vacation", CategoryType.SAVING, amount=100, is_selected=True
        )

        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        assert services.engine.total_allocated == pytest.approx(1300)
        assert services.engine.deficit_or_surplus == pytest.approx(700)

    def test_update_subcategory_amount_keeps_parent_sum(self, services):
        """Test the parent entry tracks the sum of its selected subcategories."""
        housing, rent, mortgage = add_housing(services, rent=1000, mortgage=200)
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        services.engine.update_subcategory_amount(housing.id, rent.id, 800)

        allocations = services.engine.allocations
        assert allocations[rent.id] == 800
        assert allocations[housing.id] == pytest.approx(1000)
        assert housing.amount == pytest.approx(1000)

    def test_update_category_amount_recalculates(self, services):
        """Test a new category amount is reflected in the maps."""
        saving = services.categories.create(
            "Vacation", CategoryType.SAVING, amount=100, is_selected=True
        )
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        services.engine.update_category_amount(saving.id, 250)

        assert services.engine.allocations[saving.id] == 250

    def test_add_category_recalculates(self, services):
        """Test adding a selected category brings it into the maps."""
        services.engine.set_income(2000, PaymentCadence.MONTHLY)
        category = Category(
            id=services.categories.id_factory(),
            name="Gadgets",
            type=CategoryType.SAVING,
            priority=4,
            amount=40,
            is_selected=True,
        )

        services.engine.add_category(category)

        assert services.engine.allocations[category.id] == 40
        assert services.categories.find(category.id) is category

    def test_remove_category_cascades(self, services):
        """Test removing a category drops it and its subcategories everywhere."""
        housing, rent, mortgage = add_housing(services, rent=1000, mortgage=200)
        services.engine.set_income(4000, PaymentCadence.MONTHLY)

        assert services.engine.remove_category(housing.id) is True

        engine = services.engine
        for entity_id in (housing.id, rent.id, mortgage.id):
            assert entity_id not in engine.allocations
            assert entity_id not in engine.recommended_allocations
            assert entity_id not in engine.perfect_allocations
        assert services.categories.find(housing.id) is None
        assert engine.total_allocated == 0

    def test_catalog_delete_at_cascades(self, services):
        """Test deleting by catalog position also clears the allocation maps."""
        vacation = services.categories.create(
            "Vacation", CategoryType.SAVING, amount=100, is_selected=True
        )
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        services.categories.delete_at(services.categories.index_of(vacation.id))

        engine = services.engine
        assert vacation.id not in engine.allocations
        assert vacation.id not in engine.recommended_allocations
        assert vacation.id not in engine.perfect_allocations
        assert engine.deficit_or_surplus == pytest.approx(2000)

    def test_remove_category_at(self, services):
        """Test the engine removes a category by position with its subcategories."""
        housing, rent, _ = add_housing(services, rent=800)
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        removed = services.engine.remove_category_at(0)

        assert removed is housing
        assert housing.id not in services.engine.allocations
        assert rent.id not in services.engine.allocations
        assert services.engine.total_allocated == 0

    def test_remove_category_at_out_of_range(self, services):
        """Test a bad position raises IndexError."""
        with pytest.raises(IndexError):
            services.engine.remove_category_at(3)

    def test_update_unselected_subcategory_matches_rebuild(self, services):
        """Test editing an unselected subcategory leaves no map entries."""
        housing, rent, _ = add_housing(services)
        services.categories.set_selected(housing.id, False)
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        services.engine.update_subcategory_amount(housing.id, rent.id, 900)

        assert services.engine.allocations == {}
        assert services.engine.total_allocated == 0

    def test_update_subcategory_under_unselected_parent(self, services):
        """Test a selected subcategory of an unselected category is not counted."""
        housing, rent, _ = add_housing(services, rent=500)
        services.categories.set_selected(housing.id, False)
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        services.engine.update_subcategory_amount(housing.id, rent.id, 900)

        assert rent.id not in services.engine.allocations
        assert housing.id not in services.engine.allocations
        assert services.engine.deficit_or_surplus == pytest.approx(2000)

    def test_update_subcategory_amount_to_none(self, services):
        """Test clearing a subcategory amount stores zero, not None."""
        housing, rent, mortgage = add_housing(services, rent=1000, mortgage=200)
        services.engine.set_income(2000, PaymentCadence.MONTHLY)

        services.engine.update_subcategory_amount(housing.id, rent.id, None)

        assert services.engine.allocations[rent.id] == 0
        assert services.engine.allocations[housing.id] == pytest.approx(200)

    def test_remove_unknown_category(self, services):
        """Test removing a category that does not exist returns False."""
        assert services.engine.remove_category(services.categories.id_factory()) is False

    def test_listeners_notified_on_recalculate(self, services):
        """Test subscribers are called after the maps change."""
        calls = []
        services.engine.subscribe(calls.append)

        services.engine.set_income(1000, PaymentCadence.MONTHLY)

        assert calls == [services.engine]

    def test_unsubscribed_listener_not_called(self, services):
        """Test an unsubscribed listener is no longer called."""
        calls = []
        services.engine.subscribe(calls.append)
        services.engine.unsubscribe(calls.append)

        services.engine.recalculate()

        assert calls == []
