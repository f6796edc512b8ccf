"""Output formatting helpers shared by CLI commands."""


def format_currency(value) -> str:
    """Format a number as dollars, e.g. ``$1,234.50``.

    Anything that is not a number is shown as ``$0.00``.
    """
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return "$0.00"
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"
