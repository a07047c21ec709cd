"""CLI output formatting helpers."""

from decimal import Decimal

from tallybook.domain.balance import CURRENCY_SYMBOL


def label(choice) -> str:
    """Display text for an enum member or plain string."""
    if choice is None:
        return ""
    return getattr(choice, "value", choice)


def money(amount: Decimal) -> str:
    """Signed amount with two decimals, e.g. K-1,234.50."""
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"
