"""
Expense Form Validation

DESIGN DECISION: Raw form input is checked before anything touches the
expense store. Fields are checked in form order (amount, date,
category); the first failing field decides the message the user sees.

IMPORTANT: Validation NEVER silently fixes values.
The only normalization is trimming whitespace from text fields.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from moneymap.models.expense import (
    ExpenseInput,
    ValidationIssue,
    ValidationResult,
    is_supported_amount,
)


AMOUNT_MESSAGE = "Enter a valid amount"
DATE_MESSAGE = "Select a date"
CATEGORY_MESSAGE = "Choose a category"


def parse_decimal(raw: Any) -> Optional[Decimal]:
    """Parse user input as a finite Decimal, or None."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def parse_setting_input(raw: str) -> tuple[bool, Optional[Decimal]]:
    """
    Parse the answer to a limit/income prompt.

    Returns:
        (is_valid, value). Blank input is valid and means "unset";
        anything non-numeric, negative or out of range is invalid.
    """
    text = (raw or "").strip()
    if not text:
        return True, None
    value = parse_decimal(text)
    if value is None or not is_supported_amount(value):
        return False, None
    return True, value


class ExpenseFormValidator:
    """Validates a raw expense form submission."""

    def _check_amount(self, raw: Any) -> tuple[Optional[Decimal], Optional[ValidationIssue]]:
        amount = parse_decimal(raw)
        if amount is None:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=AMOUNT_MESSAGE,
            )
        if amount <= 0:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=AMOUNT_MESSAGE,
            )
        if not is_supported_amount(amount):
            return None, ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=AMOUNT_MESSAGE,
            )
        return amount, None

    def _check_date(self, raw: Union[str, date, None]) -> tuple[Optional[date], Optional[ValidationIssue]]:
        if isinstance(raw, date):
            return raw, None
        text = (raw or "").strip()
        if not text:
            return None, ValidationIssue(
                field="date",
                issue_type="missing",
                message=DATE_MESSAGE,
            )
        try:
            return date.fromisoformat(text), None
        except ValueError:
            return None, ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=DATE_MESSAGE,
            )

    def _check_category(self, raw: Optional[str]) -> tuple[Optional[str], Optional[ValidationIssue]]:
        category = (raw or "").strip()
        if not category:
            return None, ValidationIssue(
                field="category",
                issue_type="missing",
                message=CATEGORY_MESSAGE,
            )
        return category, None

    def validate(
        self,
        amount: Any,
        expense_date: Union[str, date, None],
        category: Optional[str],
        note: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate one form submission.

        Returns:
            ValidationResult; expense_input is set only when valid
        """
        issues = []

        parsed_amount, issue = self._check_amount(amount)
        if issue:
            issues.append(issue)
        parsed_date, issue = self._check_date(expense_date)
        if issue:
            issues.append(issue)
        parsed_category, issue = self._check_category(category)
        if issue:
            issues.append(issue)

        if issues:
            return ValidationResult(is_valid=False, issues=issues)

        return ValidationResult(
            is_valid=True,
            expense_input=ExpenseInput(
                amount=parsed_amount,
                date=parsed_date,
                category=parsed_category,
                note=(note or "").strip() or None,
            ),
        )

    def get_user_message(self, result: ValidationResult) -> Optional[str]:
        """The one message shown for a rejected submission."""
        issue = result.first_error
        return issue.message if issue else None
