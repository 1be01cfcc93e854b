"""Aggregation package."""

from moneymap.aggregation.engine import (
    category_options,
    compute_stats,
    daily_totals,
    days_in_month,
    scoped_category_totals,
)

__all__ = [
    "category_options",
    "compute_stats",
    "daily_totals",
    "days_in_month",
    "scoped_category_totals",
]
