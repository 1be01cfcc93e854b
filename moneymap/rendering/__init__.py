"""Rendering package: formatting, charts and the view renderer."""

from moneymap.rendering.charts import (
    create_category_doughnut_chart,
    create_daily_bar_chart,
)
from moneymap.rendering.formatting import (
    entries_label,
    format_currency,
    month_label,
    percent_of,
    round_half_up,
    today_iso,
    today_label,
)
from moneymap.rendering.renderer import (
    NO_CATEGORY_EXPENSES_MESSAGE,
    NO_EXPENSES_MESSAGE,
    NO_SPENDING_MESSAGE,
    NOT_SET,
    ViewRenderer,
)

__all__ = [
    "create_category_doughnut_chart",
    "create_daily_bar_chart",
    "entries_label",
    "format_currency",
    "month_label",
    "percent_of",
    "round_half_up",
    "today_iso",
    "today_label",
    "NO_CATEGORY_EXPENSES_MESSAGE",
    "NO_EXPENSES_MESSAGE",
    "NO_SPENDING_MESSAGE",
    "NOT_SET",
    "ViewRenderer",
]
