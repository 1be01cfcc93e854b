"""
View Models

Plain data describing what each dashboard element shows. The renderer
fills these in; the Streamlit page only lays them out. Keeping them as
models means the whole dashboard can be asserted on in tests without a
UI running.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from moneymap.models.expense import Theme


class SummaryView(BaseModel):
    """Headline totals."""

    today_total: str
    month_total: str
    overall_total: str
    entries_label: str = Field(
        ...,
        description="e.g. '1 entry logged' / '3 entries logged'"
    )
    month_label: str = Field(
        ...,
        description="Localized 'Month Year' for the selected period"
    )


class LimitBannerView(BaseModel):
    """Monthly limit status."""

    is_set: bool
    text: str
    percent_used: int = 0
    is_over: bool = False


class BalanceCardView(BaseModel):
    """Income minus this month's spending."""

    income_text: str
    spent_text: str
    balance_text: str
    # None when income is not set
    is_negative: Optional[bool] = None


class CategoryRowView(BaseModel):
    category: str
    amount: Decimal
    amount_text: str
    percent: int


class CategoryListView(BaseModel):
    rows: list[CategoryRowView] = Field(default_factory=list)
    empty_message: Optional[str] = None


class TransactionRowView(BaseModel):
    """One row of the transactions table; id is what delete acts on."""

    id: int
    date: str
    category: str
    note: str
    amount_text: str


class TransactionsView(BaseModel):
    rows: list[TransactionRowView] = Field(default_factory=list)
    empty_message: Optional[str] = None


class ChartSeries(BaseModel):
    """Labels and values backing a chart."""

    labels: list[str] = Field(default_factory=list)
    values: list[Decimal] = Field(default_factory=list)


class DashboardView(BaseModel):
    """Everything one render pass produces, minus the figure objects."""

    summary: SummaryView
    limit_banner: LimitBannerView
    balance_card: BalanceCardView
    category_list: CategoryListView
    transactions: TransactionsView
    daily_series: ChartSeries
    category_series: ChartSeries
    category_filter_label: str
    category_options: list[str] = Field(default_factory=list)
    theme: Theme = Theme.DARK
