"""Form validation package."""

from moneymap.validation.validator import (
    AMOUNT_MESSAGE,
    CATEGORY_MESSAGE,
    DATE_MESSAGE,
    ExpenseFormValidator,
    parse_decimal,
    parse_setting_input,
)

__all__ = [
    "AMOUNT_MESSAGE",
    "CATEGORY_MESSAGE",
    "DATE_MESSAGE",
    "ExpenseFormValidator",
    "parse_decimal",
    "parse_setting_input",
]
