"""
Aggregation Engine

DESIGN DECISION: Aggregation is a pure function of the expense list.
Nothing is cached or updated incrementally; every render rescans the
whole list. With Decimal amounts the sums are exact, so the result
does not depend on list order.

Months are 0-11 throughout, matching FilterState.
"""

import calendar
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from moneymap.models.expense import (
    ALL_CATEGORIES,
    Expense,
    MonthStats,
    coerce_amount,
)


ZERO = Decimal("0")


def compute_stats(
    month: int,
    year: int,
    expenses: Iterable[Expense],
    today: Optional[date] = None,
) -> MonthStats:
    """
    Compute today/month/overall totals and the month's category breakdown.

    Args:
        month: Month to scope month_total and category_totals to (0-11)
        year: Year to scope to
        expenses: Every expense in the store
        today: Local date treated as "today" (defaults to the real one)

    Returns:
        MonthStats for the given period
    """
    today = today or date.today()
    today_total = ZERO
    month_total = ZERO
    overall_total = ZERO
    category_totals: dict[str, Decimal] = {}

    for expense in expenses:
        amount = coerce_amount(expense.amount)
        overall_total += amount

        if expense.date == today:
            today_total += amount

        if expense.date.month - 1 == month and expense.date.year == year:
            month_total += amount
            category_totals[expense.category] = (
                category_totals.get(expense.category, ZERO) + amount
            )

    return MonthStats(
        today_total=today_total,
        month_total=month_total,
        overall_total=overall_total,
        category_totals=category_totals,
    )


def days_in_month(month: int, year: int) -> int:
    """Number of days in a 0-11 month."""
    return calendar.monthrange(year, month + 1)[1]


def daily_totals(
    month: int,
    year: int,
    expenses: Iterable[Expense],
    category: str = ALL_CATEGORIES,
) -> list[Decimal]:
    """
    Per-day totals for the month, index 0 = day 1.

    Only expenses in the given category count, unless it is the
    all-categories sentinel.
    """
    totals = [ZERO] * days_in_month(month, year)
    for expense in expenses:
        if expense.date.month - 1 != month or expense.date.year != year:
            continue
        if category != ALL_CATEGORIES and expense.category != category:
            continue
        totals[expense.date.day - 1] += coerce_amount(expense.amount)
    return totals


def scoped_category_totals(
    stats: MonthStats,
    category: str = ALL_CATEGORIES,
) -> dict[str, Decimal]:
    """
    Category totals for the current view.

    With a single category selected, only that category is kept, and
    it is dropped entirely when it has no spending this month.
    """
    if category == ALL_CATEGORIES:
        return dict(stats.category_totals)
    total = stats.category_totals.get(category, ZERO)
    return {category: total} if total else {}


def category_options(expenses: Iterable[Expense]) -> list[str]:
    """Sorted distinct non-empty categories present in the store."""
    return sorted({expense.category for expense in expenses if expense.category})
