"""
Core Data Models for MoneyMap

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable for storage and export
3. Keep the expense list the only source of truth

DESIGN DECISION: Amounts are Decimals internally so that adding and then
deleting an expense restores a total exactly. They are written out as
plain JSON numbers so the stored data stays readable by hand.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


ALL_CATEGORIES = "__all__"

# Bounds for expense amounts and budget figures
MAX_AMOUNT = Decimal("1e15")
MIN_POSITIVE_AMOUNT = Decimal("0.01")


def is_supported_amount(value: Decimal) -> bool:
    """
    True for a finite amount in [0, MAX_AMOUNT] that is either zero or at
    least MIN_POSITIVE_AMOUNT.
    """
    if not value.is_finite() or value < 0 or value > MAX_AMOUNT:
        return False
    return value == 0 or value >= MIN_POSITIVE_AMOUNT


def coerce_amount(value: Any) -> Decimal:
    """
    Turn anything that might be an amount into a Decimal.

    Non-numeric, absent, NaN and infinite values become zero.
    Never raises.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def decimal_to_number(value: Optional[Decimal]) -> Union[int, float, None]:
    """Render a Decimal as the JSON number a person would have typed."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# =============================================================================
# ENUMS
# =============================================================================

class Theme(str, Enum):
    """UI colour scheme."""
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single logged expense.

    Records are never edited in place; a correction is a delete followed
    by a fresh add. The id doubles as the tie-break key when two expenses
    share a date (larger id = added later = listed first).
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        ge=0,
        description="Creation timestamp in milliseconds, unique per record"
    )
    amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=MAX_AMOUNT,
        description="Amount spent"
    )
    date: dt.date = Field(
        ...,
        description="Local calendar date of the expense"
    )
    category: str = Field(
        default="",
        description="Free-form category name"
    )
    note: Optional[str] = Field(
        default=None,
        description="Optional free text"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_bad_amounts(cls, v: Any) -> Decimal:
        """Treat non-numeric stored amounts as zero instead of failing."""
        return coerce_amount(v)

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, v: Decimal) -> Union[int, float, None]:
        return decimal_to_number(v)

    @property
    def month_index(self) -> int:
        """Month of the expense as 0-11."""
        return self.date.month - 1

    def sort_key(self) -> tuple[dt.date, int]:
        return (self.date, self.id)


# =============================================================================
# SETTINGS AND PERSISTED STATE
# =============================================================================

class BudgetSettings(BaseModel):
    """
    User-entered budget figures and theme.

    None means "not set", which is different from zero: a zero limit is
    a real limit that every expense exceeds.
    """
    model_config = ConfigDict(validate_assignment=True)

    monthly_limit: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=MAX_AMOUNT,
        description="Monthly spending limit"
    )
    monthly_income: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=MAX_AMOUNT,
        description="Monthly income used for the balance card"
    )
    theme: Theme = Field(
        default=Theme.DARK,
        description="UI theme"
    )


class PersistedState(BaseModel):
    """Everything the storage adapter restores on startup (besides theme)."""

    expenses: list[Expense] = Field(default_factory=list)
    monthly_limit: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    monthly_income: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)


# =============================================================================
# FILTER STATE
# =============================================================================

class FilterState(BaseModel):
    """
    Currently selected month/year/category.

    Transient: created fresh for every session, pointing at the current
    calendar month with all categories selected.
    """
    model_config = ConfigDict(validate_assignment=True)

    selected_month: Optional[int] = Field(
        default=None,
        ge=0,
        le=11,
        description="Selected month, 0-11"
    )
    selected_year: Optional[int] = Field(
        default=None,
        ge=1,
        le=9999,
        description="Selected year"
    )
    selected_category: str = Field(
        default=ALL_CATEGORIES,
        description="Selected category or the all-categories sentinel"
    )

    @classmethod
    def for_today(cls, today: Optional[dt.date] = None) -> "FilterState":
        today = today or dt.date.today()
        return cls(selected_month=today.month - 1, selected_year=today.year)

    def period(self, today: Optional[dt.date] = None) -> tuple[int, int]:
        """
        Get (month, year) for the selected period.

        Unset parts fall back to the current calendar month/year.
        """
        today = today or dt.date.today()
        month = self.selected_month if self.selected_month is not None else today.month - 1
        year = self.selected_year if self.selected_year is not None else today.year
        return month, year

    def select_period(self, month: int, year: int) -> None:
        self.selected_month = month
        self.selected_year = year

    @property
    def all_categories(self) -> bool:
        return self.selected_category == ALL_CATEGORIES

    def matches_category(self, category: str) -> bool:
        return self.all_categories or category == self.selected_category


# =============================================================================
# AGGREGATES
# =============================================================================

class MonthStats(BaseModel):
    """
    Result of one aggregation pass over the expense list.

    month_total and category_totals cover only the requested month;
    today_total and overall_total ignore the month entirely.
    """

    today_total: Decimal = Decimal("0")
    month_total: Decimal = Decimal("0")
    overall_total: Decimal = Decimal("0")
    category_totals: dict[str, Decimal] = Field(default_factory=dict)


# =============================================================================
# INTERACTION MODELS
# =============================================================================

class Notification(BaseModel):
    """A short message shown to the user and dismissed automatically."""

    message: str
    is_danger: bool = False
    created_at: dt.datetime = Field(default_factory=dt.datetime.now)


class ExpenseInput(BaseModel):
    """Form input that passed validation, ready for the store."""
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    date: dt.date
    category: str = Field(..., min_length=1)
    note: Optional[str] = None


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating the expense form.

    Only the first blocking issue is shown to the user, in field order
    amount, date, category.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    expense_input: Optional[ExpenseInput] = None

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        for issue in self.issues:
            if issue.severity == "error":
                return issue
        return None


class ExportPayload(BaseModel):
    """
    The downloadable data export.

    Field names are camelCase on the wire to match the storage format.
    """
    model_config = ConfigDict(populate_by_name=True)

    exported_at: str = Field(..., alias="exportedAt")
    monthly_limit: Optional[Decimal] = Field(default=None, alias="monthlyLimit")
    monthly_income: Optional[Decimal] = Field(default=None, alias="monthlyIncome")
    expenses: list[Expense] = Field(default_factory=list)

    @field_serializer('monthly_limit', 'monthly_income', when_used='json')
    def serialize_optional_amount(self, v: Optional[Decimal]) -> Union[int, float, None]:
        return decimal_to_number(v)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
