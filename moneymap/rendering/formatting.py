"""Formatting utilities for currency, percentages and date labels."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from moneymap.models.expense import coerce_amount


DEFAULT_SYMBOL = "₹"


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero, at any magnitude."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def format_currency(amount: Any, symbol: str = DEFAULT_SYMBOL) -> str:
    """Format an amount as a whole number with the currency symbol.

    Example:
        >>> format_currency(Decimal("1234.5"))
        '₹1235'
        >>> format_currency(None)
        '₹0'
    """
    return f"{symbol}{round_half_up(coerce_amount(amount))}"


def percent_of(part: Decimal, whole: Optional[Decimal]) -> int:
    """Rounded percentage of part in whole; 0 when whole is zero or unset."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


def month_label(month: int, year: int) -> str:
    """Localized 'Month Year' label for a 0-11 month, e.g. 'January 2024'."""
    return date(year, month + 1, 1).strftime("%B %Y")


def entries_label(count: int) -> str:
    noun = "entry" if count == 1 else "entries"
    return f"{count} {noun} logged"


def today_label(today: Optional[date] = None) -> str:
    """Short header label, e.g. 'Mon, 19 Oct'."""
    today = today or date.today()
    return f"{today:%a}, {today.day} {today:%b}"


def today_iso(today: Optional[date] = None) -> str:
    return (today or date.today()).isoformat()
