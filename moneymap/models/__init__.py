"""
Data Models Package

This package contains all Pydantic models used in MoneyMap.
All data flowing through the system must conform to these schemas.
"""

from moneymap.models.expense import (
    ALL_CATEGORIES,
    BudgetSettings,
    Expense,
    ExpenseInput,
    ExportPayload,
    FilterState,
    MonthStats,
    Notification,
    PersistedState,
    Theme,
    ValidationIssue,
    ValidationResult,
    MAX_AMOUNT,
    MIN_POSITIVE_AMOUNT,
    coerce_amount,
    decimal_to_number,
    is_supported_amount,
)
from moneymap.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
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

__all__ = [
    # Expense models
    "ALL_CATEGORIES",
    "BudgetSettings",
    "Expense",
    "ExpenseInput",
    "ExportPayload",
    "FilterState",
    "MonthStats",
    "Notification",
    "PersistedState",
    "Theme",
    "ValidationIssue",
    "ValidationResult",
    "MAX_AMOUNT",
    "MIN_POSITIVE_AMOUNT",
    "coerce_amount",
    "decimal_to_number",
    "is_supported_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # View models
    "BalanceCardView",
    "CategoryListView",
    "CategoryRowView",
    "ChartSeries",
    "DashboardView",
    "LimitBannerView",
    "SummaryView",
    "TransactionRowView",
    "TransactionsView",
]
