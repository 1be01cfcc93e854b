"""Tests for the aggregation engine."""

from datetime import date
from decimal import Decimal

from moneymap.aggregation import (
    category_options,
    compute_stats,
    daily_totals,
    days_in_month,
    scoped_category_totals,
)
from moneymap.models.expense import ALL_CATEGORIES, Expense


def make_expense(expense_id, amount, day, category="Food"):
    return Expense(id=expense_id, amount=Decimal(str(amount)), date=day, category=category)


EXPENSES = [
    make_expense(1, 120, date(2024, 1, 15), "Food"),
    make_expense(2, 80, date(2024, 1, 20), "Transport"),
    make_expense(3, 30, date(2024, 1, 20), "Food"),
    make_expense(4, 200, date(2023, 12, 31), "Bills"),
    make_expense(5, 50, date(2023, 1, 10), "Food"),
]


class TestComputeStats:
    """Tests for compute_stats."""

    def test_month_scoped_totals(self):
        stats = compute_stats(0, 2024, EXPENSES, today=date(2024, 1, 20))
        assert stats.month_total == Decimal("230")
        assert stats.category_totals == {
            "Food": Decimal("150"),
            "Transport": Decimal("80"),
        }

    def test_today_and_overall_ignore_month(self):
        stats = compute_stats(11, 2023, EXPENSES, today=date(2024, 1, 20))
        assert stats.today_total == Decimal("110")
        assert stats.overall_total == Decimal("480")
        assert stats.month_total == Decimal("200")

    def test_same_month_other_year_excluded(self):
        stats = compute_stats(0, 2023, EXPENSES, today=date(2024, 1, 20))
        assert stats.month_total == Decimal("50")

    def test_empty_list(self):
        stats = compute_stats(0, 2024, [], today=date(2024, 1, 20))
        assert stats.today_total == stats.month_total == stats.overall_total == Decimal("0")
        assert stats.category_totals == {}

    def test_order_independent(self):
        forward = compute_stats(0, 2024, EXPENSES, today=date(2024, 1, 20))
        backward = compute_stats(0, 2024, list(reversed(EXPENSES)), today=date(2024, 1, 20))
        assert forward == backward

    def test_sum_of_categories_equals_month_total(self):
        stats = compute_stats(0, 2024, EXPENSES, today=date(2024, 1, 20))
        assert sum(stats.category_totals.values()) == stats.month_total


class TestDailyTotals:
    """Tests for per-day series."""

    def test_length_matches_days_in_month(self):
        assert len(daily_totals(1, 2024, EXPENSES)) == 29
        assert len(daily_totals(1, 2023, EXPENSES)) == 28
        assert len(daily_totals(0, 2024, EXPENSES)) == 31
        assert days_in_month(3, 2024) == 30

    def test_amounts_land_on_their_day(self):
        totals = daily_totals(0, 2024, EXPENSES)
        assert totals[14] == Decimal("120")
        assert totals[19] == Decimal("110")
        assert sum(totals) == Decimal("230")

    def test_category_filter(self):
        totals = daily_totals(0, 2024, EXPENSES, category="Food")
        assert totals[19] == Decimal("30")
        assert sum(totals) == Decimal("150")


class TestCategoryHelpers:
    """Tests for scoped totals and category options."""

    def test_scoped_all_categories(self):
        stats = compute_stats(0, 2024, EXPENSES, today=date(2024, 1, 20))
        assert scoped_category_totals(stats, ALL_CATEGORIES) == stats.category_totals

    def test_scoped_single_category(self):
        stats = compute_stats(0, 2024, EXPENSES, today=date(2024, 1, 20))
        assert scoped_category_totals(stats, "Transport") == {"Transport": Decimal("80")}

    def test_scoped_category_without_spending_is_empty(self):
        stats = compute_stats(0, 2024, EXPENSES, today=date(2024, 1, 20))
        assert scoped_category_totals(stats, "Bills") == {}

    def test_category_options_sorted_distinct(self):
        assert category_options(EXPENSES) == ["Bills", "Food", "Transport"]
