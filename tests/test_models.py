"""
Tests for MoneyMap models

Test strategy:
1. Unit tests for individual components (models, validators)
2. Integration tests for flows (with in-memory storage)
3. No real files outside pytest's tmp_path
"""

import json
import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from moneymap.models.expense import (
    ALL_CATEGORIES,
    MAX_AMOUNT,
    BudgetSettings,
    Expense,
    ExportPayload,
    FilterState,
    Theme,
    ValidationIssue,
    ValidationResult,
    coerce_amount,
    decimal_to_number,
    is_supported_amount,
)
from moneymap.audit import AuditLogger
from moneymap.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(
            id=1,
            amount=Decimal("120"),
            date=date(2024, 1, 15),
            category="Food",
            note="Lunch",
        )
        assert expense.amount == Decimal("120")
        assert expense.month_index == 0
        assert expense.sort_key() == (date(2024, 1, 15), 1)

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        expense = Expense(id=1, amount=10, date=date(2024, 1, 1), category="  Food  ")
        assert expense.category == "Food"

    def test_expense_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Expense(id=1, amount=Decimal("-5"), date=date(2024, 1, 1), category="Food")

    def test_expense_non_numeric_amount_becomes_zero(self):
        """Stored garbage amounts count as zero instead of failing."""
        expense = Expense(id=1, amount="abc", date=date(2024, 1, 1), category="Food")
        assert expense.amount == Decimal("0")

    def test_expense_rejects_amount_above_maximum(self):
        with pytest.raises(ValidationError):
            Expense(id=1, amount=MAX_AMOUNT * 10, date=date(2024, 1, 1), category="Food")

    def test_expense_text_has_no_length_cap(self):
        expense = Expense(
            id=1, amount=10, date=date(2024, 1, 1), category="c" * 150, note="n" * 600
        )
        assert len(expense.category) == 150
        assert len(expense.note) == 600

    def test_expense_is_immutable(self):
        """Records are never edited in place."""
        expense = Expense(id=1, amount=10, date=date(2024, 1, 1), category="Food")
        with pytest.raises(ValidationError):
            expense.amount = Decimal("20")

    def test_expense_json_writes_plain_numbers(self):
        """Amounts serialize as JSON numbers, dates as ISO strings."""
        expense = Expense(id=7, amount=Decimal("12.50"), date=date(2024, 3, 2), category="Food")
        data = json.loads(expense.model_dump_json())
        assert data["amount"] == 12.5
        assert data["date"] == "2024-03-02"
        assert data["note"] is None


class TestAmountHelpers:
    """Tests for amount coercion and number rendering."""

    @pytest.mark.parametrize("value", [None, True, "abc", "NaN", "Infinity", float("nan")])
    def test_coerce_amount_falls_back_to_zero(self, value):
        assert coerce_amount(value) == Decimal("0")

    def test_coerce_amount_parses_numbers(self):
        assert coerce_amount(" 42.5 ") == Decimal("42.5")
        assert coerce_amount(7) == Decimal("7")

    def test_is_supported_amount(self):
        assert is_supported_amount(Decimal("0"))
        assert is_supported_amount(Decimal("0.01"))
        assert is_supported_amount(MAX_AMOUNT)
        assert not is_supported_amount(Decimal("0.001"))
        assert not is_supported_amount(MAX_AMOUNT + 1)
        assert not is_supported_amount(Decimal("-1"))
        assert not is_supported_amount(Decimal("NaN"))

    def test_decimal_to_number(self):
        assert decimal_to_number(Decimal("500.00")) == 500
        assert isinstance(decimal_to_number(Decimal("500.00")), int)
        assert decimal_to_number(Decimal("1.5")) == 1.5
        assert decimal_to_number(None) is None


class TestSettingsModels:
    """Tests for BudgetSettings, Theme and FilterState."""

    def test_budget_settings_default_unset(self):
        budget = BudgetSettings()
        assert budget.monthly_limit is None
        assert budget.monthly_income is None
        assert budget.theme is Theme.DARK

    def test_budget_settings_rejects_negative_assignment(self):
        budget = BudgetSettings()
        with pytest.raises(ValidationError):
            budget.monthly_limit = Decimal("-1")

    def test_theme_toggle(self):
        assert Theme.DARK.toggled() is Theme.LIGHT
        assert Theme.LIGHT.toggled() is Theme.DARK

    def test_filter_state_for_today(self):
        filters = FilterState.for_today(date(2024, 12, 31))
        assert filters.selected_month == 11
        assert filters.selected_year == 2024
        assert filters.selected_category == ALL_CATEGORIES
        assert filters.all_categories

    def test_filter_state_period_falls_back_to_today(self):
        filters = FilterState()
        assert filters.period(date(2024, 5, 3)) == (4, 2024)

    def test_filter_state_rejects_month_out_of_range(self):
        filters = FilterState()
        with pytest.raises(ValidationError):
            filters.selected_month = 12

    def test_filter_state_matches_category(self):
        filters = FilterState(selected_category="Food")
        assert filters.matches_category("Food")
        assert not filters.matches_category("Bills")
        assert FilterState().matches_category("Bills")


class TestExportPayload:
    """Tests for the export document."""

    def test_export_uses_camel_case_keys(self):
        payload = ExportPayload(
            exported_at="2024-01-20T10:00:00.000Z",
            monthly_limit=Decimal("500"),
            monthly_income=None,
            expenses=[Expense(id=1, amount=10, date=date(2024, 1, 1), category="Food")],
        )
        data = json.loads(payload.to_json())
        assert set(data) == {"exportedAt", "monthlyLimit", "monthlyIncome", "expenses"}
        assert data["monthlyLimit"] == 500
        assert data["monthlyIncome"] is None
        assert data["expenses"][0]["category"] == "Food"


class TestAuditModels:
    """Tests for audit models."""

    def test_audit_event_creation(self):
        """Test AuditEvent creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO
        assert event.event_id is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.STORAGE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not persist",
            error_message="disk full",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "storage_save_failed"
        assert log_dict["severity"] == "error"
        assert log_dict["error_message"] == "disk full"

    def test_audit_event_builder_expense_added(self):
        """Test AuditEventBuilder for an added expense."""
        event = AuditEventBuilder.expense_added(
            expense_id=42,
            amount="120",
            category="Food",
            expense_date="2024-01-15",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.entity_id == "42"
        assert event.details["category"] == "Food"
        assert event.is_user_action

    def test_audit_event_builder_setting_updated(self):
        """Limit and income updates map to their own event types."""
        limit = AuditEventBuilder.setting_updated("monthly_limit", "500")
        income = AuditEventBuilder.setting_updated("monthly_income", None)
        assert limit.event_type == AuditEventType.LIMIT_UPDATED
        assert income.event_type == AuditEventType.INCOME_UPDATED
        assert "unset" in income.description

    def test_audit_event_builder_expenses_cleared_is_warning(self):
        event = AuditEventBuilder.expenses_cleared(count=3)
        assert event.severity == AuditSeverity.WARNING
        assert event.details["removed"] == 3

    def test_audit_event_builder_long_category(self):
        """Descriptions are not length-capped; categories are free-form."""
        event = AuditEventBuilder.expense_added(
            expense_id=1,
            amount="10",
            category="c" * 600,
            expense_date="2024-01-15",
        )
        assert "c" * 600 in event.description

    def test_audit_logger_log_error(self):
        """log_error records a system error event."""
        audit_logger = AuditLogger()
        audit_logger.log_error(
            error_type="StorageError",
            error_message="disk full",
            details={"fallback": "in_memory"},
        )
        event = audit_logger.recent_events[0]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.details["fallback"] == "in_memory"


class TestValidationResult:
    """Tests for validation result model."""

    def test_validation_result_first_error(self):
        """Test first_error property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Enter a valid amount",
                    severity="error",
                ),
            ],
        )
        assert result.first_error.field == "amount"

    def test_validation_result_warnings_only(self):
        """Test result with only warnings."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="note",
                    issue_type="long",
                    message="Note is long",
                    severity="warning",
                ),
            ],
        )
        assert result.first_error is None
