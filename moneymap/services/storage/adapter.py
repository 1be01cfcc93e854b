"""
Storage Adapter

Saves and restores the app state through a KeyValueStore, one key per
entry: the expense list, the monthly limit, the monthly income and the
theme.

DESIGN DECISION: Restoring is best-effort. A missing or corrupt entry
falls back to its default (empty list / unset / default theme), the
failure is logged, and nothing is raised. Saving is likewise never
fatal: a failed write is logged and reported as False.
"""

import json
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError

from moneymap.audit import AuditLogger
from moneymap.config import StorageSettings
from moneymap.models.expense import (
    Expense,
    PersistedState,
    Theme,
    decimal_to_number,
    is_supported_amount,
)
from moneymap.services.storage.interface import KeyValueStore, StorageError


_EXPENSE_LIST = TypeAdapter(list[Expense])


class StorageAdapter:
    """
    Whole-state snapshot persistence.

    Every save rewrites every entry; there is no batching and no
    incremental update.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[StorageSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._settings = settings or StorageSettings()
        self._audit = audit_logger or AuditLogger()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # =========================================================================
    # SAVE
    # =========================================================================

    def save(
        self,
        expenses: Iterable[Expense],
        monthly_limit: Optional[Decimal],
        monthly_income: Optional[Decimal],
    ) -> bool:
        """
        Persist the expense list and both optional scalars.

        An unset scalar removes its key, so "not set" survives a reload.

        Returns:
            True if every entry was written
        """
        ok = self._write(
            self._settings.expenses_key,
            _EXPENSE_LIST.dump_json(list(expenses)).decode("utf-8"),
        )
        ok = self._write_scalar(self._settings.limit_key, monthly_limit) and ok
        ok = self._write_scalar(self._settings.income_key, monthly_income) and ok
        return ok

    def save_theme(self, theme: Theme) -> bool:
        return self._write(self._settings.theme_key, theme.value)

    def _write_scalar(self, key: str, value: Optional[Decimal]) -> bool:
        if value is None:
            try:
                self._store.remove_item(key)
            except (StorageError, OSError) as e:
                self._audit.log_storage_save_failed(key, str(e))
                return False
            return True
        return self._write(key, str(decimal_to_number(value)))

    def _write(self, key: str, value: str) -> bool:
        try:
            self._store.set_item(key, value)
        except (StorageError, OSError) as e:
            self._audit.log_storage_save_failed(key, str(e))
            return False
        return True

    # =========================================================================
    # LOAD
    # =========================================================================

    def load(self) -> PersistedState:
        """
        Restore expenses, limit and income.

        Never raises; anything unreadable comes back as its default.
        """
        return PersistedState(
            expenses=self._load_expenses(),
            monthly_limit=self._load_scalar(self._settings.limit_key),
            monthly_income=self._load_scalar(self._settings.income_key),
        )

    def load_theme(self, default: Theme = Theme.DARK) -> Theme:
        raw = self._read(self._settings.theme_key)
        if raw is None:
            return default
        try:
            return Theme(raw.strip().lower())
        except ValueError:
            self._audit.log_storage_load_failed(
                self._settings.theme_key, f"Unknown theme: {raw!r}"
            )
            return default

    def _load_expenses(self) -> list[Expense]:
        key = self._settings.expenses_key
        raw = self._read(key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            self._audit.log_storage_load_failed(key, f"Invalid JSON: {e}")
            return []
        if not isinstance(items, list):
            self._audit.log_storage_load_failed(key, "Expense entry is not a list")
            return []

        expenses = []
        skipped = 0
        for item in items:
            try:
                expenses.append(Expense.model_validate(item))
            except ValidationError:
                skipped += 1
        if skipped:
            self._audit.log_storage_load_failed(
                key, f"Skipped {skipped} unreadable expense record(s)"
            )
        return expenses

    def _load_scalar(self, key: str) -> Optional[Decimal]:
        raw = self._read(key)
        if raw is None:
            return None
        value = parse_non_negative(raw)
        if value is None:
            self._audit.log_storage_load_failed(key, f"Not a non-negative number: {raw!r}")
        return value

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._store.get_item(key)
        except (StorageError, OSError) as e:
            self._audit.log_storage_load_failed(key, str(e))
            return None


def parse_non_negative(raw: str) -> Optional[Decimal]:
    """Parse a stored scalar; None unless it is a supported non-negative amount."""
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, ValueError, AttributeError):
        return None
    if not is_supported_amount(value):
        return None
    return value
