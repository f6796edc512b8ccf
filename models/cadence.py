"""Payment cadence model and per-paycheck/monthly conversions."""

from enum import Enum


class PaymentCadence(Enum):
    """How often a paycheck is received.

    Conversions use calendar-year ratios (52 weeks, 26 fortnights, 24
    half-months per 12 months). A round trip through ``to_per_paycheck`` and
    ``to_monthly`` is exact for monthly and semi-monthly; weekly and bi-weekly
    multiply and divide by 52/12 and 26/12, so they only round-trip to within
    floating-point precision (typically a few ulps).
    """

    WEEKLY = "Weekly"
    BI_WEEKLY = "Bi-Weekly"
    SEMI_MONTHLY = "Semi-Monthly"
    MONTHLY = "Monthly"

    @classmethod
    def from_label(cls, label: str) -> "PaymentCadence":
        """Look up a cadence by its label, ignoring case, spaces and dashes.

        Raises:
            ValueError: If the label does not name a cadence.
        """
        normalized = label.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        for cadence in cls:
            if cadence.value.lower().replace("-", "") == normalized:
                return cadence
        raise ValueError(f"Unknown payment cadence: {label}")

    @property
    def paychecks_per_year(self) -> int:
        return _PAYCHECKS_PER_YEAR[self]

    @property
    def paychecks_per_month(self) -> float:
        return self.paychecks_per_year / 12

    def to_monthly(self, amount: float) -> float:
        """Convert a per-paycheck amount to its monthly equivalent."""
        return amount * self.paychecks_per_year / 12

    def to_per_paycheck(self, monthly_amount: float) -> float:
        """Convert a monthly amount to the share due on each paycheck."""
        return monthly_amount * 12 / self.paychecks_per_year

    def to_annual(self, amount: float) -> float:
        """Convert a per-paycheck amount to its yearly total."""
        return amount * self.paychecks_per_year


_PAYCHECKS_PER_YEAR = {
    PaymentCadence.WEEKLY: 52,
    PaymentCadence.BI_WEEKLY: 26,
    PaymentCadence.SEMI_MONTHLY: 24,
    PaymentCadence.MONTHLY: 12,
}
