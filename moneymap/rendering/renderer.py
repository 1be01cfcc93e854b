"""
View Renderer

Projects the expense list, the filter state and the budget settings into
the dashboard: summary figures, limit banner, balance card, category
list, transactions table and the two charts.

DESIGN DECISION: render() is a full redraw. It recomputes the stats
from scratch and rebuilds every view and both figures; there is no
partial invalidation. The renderer owns the figure objects and drops
the previous pair before creating the next.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import plotly.graph_objects as go

from moneymap.aggregation import (
    category_options,
    compute_stats,
    daily_totals,
    scoped_category_totals,
)
from moneymap.config import AppSettings
from moneymap.models.expense import (
    BudgetSettings,
    Expense,
    FilterState,
    MonthStats,
)
from moneymap.models.view import (
    BalanceCardView,
    CategoryListView,
    CategoryRowView,
    ChartSeries,
    DashboardView,
    LimitBannerView,
    SummaryView,
    TransactionRowView,
    TransactionsView,
)
from moneymap.rendering.charts import (
    create_category_doughnut_chart,
    create_daily_bar_chart,
)
from moneymap.rendering.formatting import (
    entries_label,
    format_currency,
    month_label,
    percent_of,
)


NOT_SET = "Not set"
NO_EXPENSES_MESSAGE = "No expenses yet. Add your first one above ✨"
NO_CATEGORY_EXPENSES_MESSAGE = "No expenses yet for this category."
NO_SPENDING_MESSAGE = "No spending in this view yet."


class ViewRenderer:
    """
    Builds a DashboardView plus the two chart figures.

    Args:
        settings: App settings (currency symbol); defaults to AppSettings()
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or AppSettings()
        self._daily_chart: Optional[go.Figure] = None
        self._category_chart: Optional[go.Figure] = None
        self.render_count = 0

    @property
    def daily_chart(self) -> Optional[go.Figure]:
        return self._daily_chart

    @property
    def category_chart(self) -> Optional[go.Figure]:
        return self._category_chart

    def dispose_charts(self) -> None:
        """Release the current figures."""
        self._daily_chart = None
        self._category_chart = None

    def _money(self, amount) -> str:
        return format_currency(amount, self._settings.currency_symbol)

    # =========================================================================
    # FULL RENDER
    # =========================================================================

    def render(
        self,
        expenses: Sequence[Expense],
        filters: FilterState,
        budget: BudgetSettings,
        today: Optional[date] = None,
    ) -> DashboardView:
        """
        Redraw everything for the current state.

        Returns:
            The new DashboardView; the matching figures are available
            afterwards as daily_chart and category_chart.
        """
        today = today or date.today()
        month, year = filters.period(today)
        stats = compute_stats(month, year, expenses, today=today)
        scoped = scoped_category_totals(stats, filters.selected_category)

        per_day = daily_totals(month, year, expenses, filters.selected_category)
        daily_series = ChartSeries(
            labels=[str(day) for day in range(1, len(per_day) + 1)],
            values=per_day,
        )
        category_series = ChartSeries(
            labels=list(scoped),
            values=list(scoped.values()),
        )

        view = DashboardView(
            summary=self.render_summary(expenses, stats, month, year),
            limit_banner=self.render_limit_banner(stats, budget),
            balance_card=self.render_balance_card(stats, budget),
            category_list=self.render_category_list(scoped, stats, filters),
            transactions=self.render_transactions(expenses, filters),
            daily_series=daily_series,
            category_series=category_series,
            category_filter_label=self.category_filter_label(filters),
            category_options=category_options(expenses),
            theme=budget.theme,
        )

        self.dispose_charts()
        self._daily_chart = create_daily_bar_chart(daily_series, budget.theme)
        self._category_chart = create_category_doughnut_chart(category_series, budget.theme)
        self.render_count += 1
        return view

    # =========================================================================
    # INDIVIDUAL VIEWS
    # =========================================================================

    def render_summary(
        self,
        expenses: Sequence[Expense],
        stats: MonthStats,
        month: int,
        year: int,
    ) -> SummaryView:
        return SummaryView(
            today_total=self._money(stats.today_total),
            month_total=self._money(stats.month_total),
            overall_total=self._money(stats.overall_total),
            entries_label=entries_label(len(expenses)),
            month_label=month_label(month, year),
        )

    def render_limit_banner(
        self,
        stats: MonthStats,
        budget: BudgetSettings,
    ) -> LimitBannerView:
        limit = budget.monthly_limit
        if limit is None:
            return LimitBannerView(is_set=False, text=NOT_SET)

        used = percent_of(stats.month_total, limit)
        return LimitBannerView(
            is_set=True,
            text=f"{self._money(limit)} · {used}% used",
            percent_used=used,
            is_over=stats.month_total > limit,
        )

    def render_balance_card(
        self,
        stats: MonthStats,
        budget: BudgetSettings,
    ) -> BalanceCardView:
        spent_text = f"Spent: {self._money(stats.month_total)}"
        income = budget.monthly_income
        if income is None:
            return BalanceCardView(
                income_text=f"Income: {NOT_SET}",
                spent_text=spent_text,
                balance_text=self._money(0),
            )

        balance = income - stats.month_total
        return BalanceCardView(
            income_text=f"Income: {self._money(income)}",
            spent_text=spent_text,
            balance_text=self._money(balance),
            is_negative=balance < 0,
        )

    def render_category_list(
        self,
        scoped: dict[str, Decimal],
        stats: MonthStats,
        filters: FilterState,
    ) -> CategoryListView:
        """
        Categories by descending amount with their share of the view.

        The share is taken of the month total, or of the single selected
        category's total when one is selected.
        """
        if not scoped:
            return CategoryListView(empty_message=NO_SPENDING_MESSAGE)

        if filters.all_categories:
            denominator = stats.month_total
        else:
            denominator = next(iter(scoped.values()))
        denominator = denominator or Decimal("1")

        ranked = sorted(scoped.items(), key=lambda item: item[1], reverse=True)
        return CategoryListView(rows=[
            CategoryRowView(
                category=category,
                amount=total,
                amount_text=self._money(total),
                percent=percent_of(total, denominator),
            )
            for category, total in ranked
        ])

    def render_transactions(
        self,
        expenses: Sequence[Expense],
        filters: FilterState,
    ) -> TransactionsView:
        """Newest date first; same-date entries newest insertion first."""
        if not expenses:
            return TransactionsView(empty_message=NO_EXPENSES_MESSAGE)

        filtered = [e for e in expenses if filters.matches_category(e.category)]
        if not filtered:
            return TransactionsView(empty_message=NO_CATEGORY_EXPENSES_MESSAGE)

        ordered = sorted(filtered, key=Expense.sort_key, reverse=True)
        return TransactionsView(rows=[
            TransactionRowView(
                id=expense.id,
                date=expense.date.isoformat(),
                category=expense.category,
                note=expense.note or "-",
                amount_text=self._money(expense.amount),
            )
            for expense in ordered
        ])

    @staticmethod
    def category_filter_label(filters: FilterState) -> str:
        if filters.all_categories:
            return "· all categories"
        return f"· {filters.selected_category}"
