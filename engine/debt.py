"""Debt payoff amortization helpers."""

from datetime import date

from dateutil.relativedelta import relativedelta


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end, truncated toward zero.

    Negative when end is before start. Partial months do not count, so
    Jan 31 -> Feb 28 is 0 months, Jan 31 -> Apr 30 is 2 and Jan 15 -> Mar 15
    is 2.
    """
    if end < start:
        return -months_between(end, start)

    delta = relativedelta(end, start)
    months = delta.years * 12 + delta.months
    # relativedelta clamps to month ends (Jan 31 + 1 month = Feb 28); a month
    # only counts once end reaches start's day of month.
    if months and end - relativedelta(months=months) < start:
        months -= 1
    return months


def months_until_due(due_date: date, today: date) -> int:
    """Months left to pay off a debt, never less than 1."""
    return max(1, months_between(today, due_date))


def monthly_debt_allocation(total_amount: float, due_date: date, today: date) -> float:
    """Spread a debt balance evenly over the months left until it is due.

    A due date in the past or within the current month yields the full
    balance.
    """
    return total_amount / months_until_due(due_date, today)
