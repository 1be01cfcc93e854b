"""
Main Controller for MoneyMap

This module ties the components together and defines what each user
action does:
1. Validate input (form fields, prompt answers, filter values)
2. Mutate the expense store, the budget settings or the filter state
3. Re-render the whole dashboard

DESIGN DECISION: The controller owns the one application state object
set (store, budget settings, filters, renderer). The UI never touches
them directly; it calls a controller method and shows the returned
Notification, if any, then draws controller.view.
"""

from datetime import date, datetime, timezone
from typing import Callable, Optional

from moneymap.aggregation import category_options, compute_stats
from moneymap.audit import AuditLogger, configure_logging
from moneymap.config import AppSettings, get_settings
from moneymap.models.expense import (
    ALL_CATEGORIES,
    BudgetSettings,
    Expense,
    ExportPayload,
    FilterState,
    Notification,
    Theme,
)
from moneymap.models.view import DashboardView
from moneymap.rendering import ViewRenderer, format_currency
from moneymap.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    StorageAdapter,
)
from moneymap.store import ExpenseStore, IdGenerator
from moneymap.validation import ExpenseFormValidator, parse_setting_input


EXPENSE_ADDED = "Expense added"
EXPENSE_DELETED = "Expense deleted"
EXPENSES_CLEARED = "All expenses cleared"
INVALID_AMOUNT = "Invalid amount"
LIMIT_UPDATED = "Monthly limit updated"
INCOME_UPDATED = "Monthly income updated"


class ExpenseTrackerController:
    """
    Translates user actions into state changes plus a full re-render.

    Every public mutating method ends with refresh(), so controller.view
    always reflects the current state.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        renderer: Optional[ViewRenderer] = None,
        validator: Optional[ExpenseFormValidator] = None,
        app_settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        today_provider: Callable[[], date] = date.today,
        id_generator: Optional[IdGenerator] = None,
    ):
        self._settings = app_settings or AppSettings()
        self._storage = storage
        self._renderer = renderer or ViewRenderer(self._settings)
        self._validator = validator or ExpenseFormValidator()
        self._audit = audit_logger or AuditLogger()
        self._today = today_provider

        restored = storage.load()
        self.budget = BudgetSettings(
            monthly_limit=restored.monthly_limit,
            monthly_income=restored.monthly_income,
            theme=storage.load_theme(Theme(self._settings.default_theme)),
        )
        self.filters = FilterState.for_today(self._today())
        self.store = ExpenseStore(
            storage=storage,
            filters=self.filters,
            budget=self.budget,
            expenses=restored.expenses,
            id_generator=id_generator,
            audit_logger=self._audit,
        )
        self._view = self.refresh()

    @property
    def view(self) -> DashboardView:
        return self._view

    @property
    def renderer(self) -> ViewRenderer:
        return self._renderer

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def today(self) -> date:
        return self._today()

    def _money(self, amount) -> str:
        return format_currency(amount, self._settings.currency_symbol)

    def refresh(self) -> DashboardView:
        """
        Recompute and redraw everything.

        A selected category that no longer has any expenses falls back
        to all categories first.
        """
        if (
            not self.filters.all_categories
            and self.filters.selected_category not in category_options(self.store)
        ):
            self.filters.selected_category = ALL_CATEGORIES

        self._view = self._renderer.render(
            self.store.expenses,
            self.filters,
            self.budget,
            today=self._today(),
        )
        return self._view

    # =========================================================================
    # EXPENSES
    # =========================================================================

    def submit_expense(
        self,
        amount,
        expense_date,
        category: Optional[str],
        note: Optional[str] = None,
    ) -> Notification:
        """
        Handle an expense form submission.

        Invalid input aborts with a danger notification and no state
        change. A valid expense is added, the month filter jumps to its
        month, and the returned notification warns if that month is now
        over the limit and/or the income.
        """
        result = self._validator.validate(amount, expense_date, category, note)
        if not result.is_valid:
            message = self._validator.get_user_message(result)
            self._audit.log_validation_failed(result.first_error.field, message)
            return Notification(message=message, is_danger=True)

        data = result.expense_input
        expense = self.store.add(
            amount=data.amount,
            expense_date=data.date,
            category=data.category,
            note=data.note,
        )
        self.refresh()
        return self._added_notification(expense)

    def _added_notification(self, expense: Expense) -> Notification:
        stats = compute_stats(
            expense.month_index,
            expense.date.year,
            self.store.expenses,
            today=self._today(),
        )
        limit = self.budget.monthly_limit
        income = self.budget.monthly_income

        warning = None
        if limit is not None and stats.month_total > limit:
            warning = f"You crossed your monthly limit of {self._money(limit)}"
        if income is not None and stats.month_total > income:
            income_part = f"your income ({self._money(income)})"
            if warning:
                warning += f" and {income_part}"
            else:
                warning = f"You crossed {income_part}"

        if warning:
            return Notification(message=warning, is_danger=True)
        return Notification(message=EXPENSE_ADDED)

    def delete_expense(self, expense_id: int) -> Optional[Notification]:
        """Delete by id. Unknown ids change nothing and return None."""
        found = self.store.delete(expense_id)
        self.refresh()
        if not found:
            return None
        return Notification(message=EXPENSE_DELETED)

    def clear_all(self, confirm: Callable[[], bool]) -> Optional[Notification]:
        """
        Remove every expense after confirm() agrees.

        Declining is silent: no state change, no notification.
        """
        if not self.store.clear(confirm):
            return None
        self.refresh()
        return Notification(message=EXPENSES_CLEARED)

    # =========================================================================
    # FILTERS
    # =========================================================================

    def set_month_filter(self, value: Optional[str]) -> bool:
        """
        Select a month from a 'YYYY-MM' string.

        Empty or malformed values are ignored. Returns True if applied.
        """
        if not value:
            return False
        parts = value.strip().split("-")
        if len(parts) != 2:
            return False
        try:
            year, month = int(parts[0]), int(parts[1])
        except ValueError:
            return False
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            return False

        self.filters.select_period(month - 1, year)
        self.refresh()
        return True

    def set_category_filter(self, category: Optional[str]) -> None:
        self.filters.selected_category = category or ALL_CATEGORIES
        self.refresh()

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def set_monthly_limit(self, raw: Optional[str]) -> Optional[Notification]:
        """
        Apply the answer to the limit prompt.

        None means the prompt was cancelled; blank input unsets the limit.
        """
        return self._set_budget_figure("monthly_limit", raw, LIMIT_UPDATED)

    def set_monthly_income(self, raw: Optional[str]) -> Optional[Notification]:
        """Apply the answer to the income prompt (same rules as the limit)."""
        return self._set_budget_figure("monthly_income", raw, INCOME_UPDATED)

    def _set_budget_figure(
        self,
        name: str,
        raw: Optional[str],
        success_message: str,
    ) -> Optional[Notification]:
        if raw is None:
            return None
        ok, value = parse_setting_input(raw)
        if not ok:
            return Notification(message=INVALID_AMOUNT, is_danger=True)

        setattr(self.budget, name, value)
        self.store.persist()
        self._audit.log_setting_updated(name, str(value) if value is not None else None)
        self.refresh()
        return Notification(message=success_message)

    def toggle_theme(self) -> Theme:
        self.budget.theme = self.budget.theme.toggled()
        self._storage.save_theme(self.budget.theme)
        self._audit.log_theme_changed(self.budget.theme.value)
        self.refresh()
        return self.budget.theme

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export_data(self, now: Optional[datetime] = None) -> tuple[str, str]:
        """
        Serialize limit, income and all expenses, and record the export.

        Read-only: nothing in the state changes.

        Returns:
            (suggested filename, JSON text)
        """
        filename, content = self.build_export(now)
        self.record_export()
        return filename, content

    def record_export(self) -> None:
        """Audit an export that the UI delivered itself."""
        self._audit.log_data_exported(len(self.store), self._settings.export_filename)

    def build_export(self, now: Optional[datetime] = None) -> tuple[str, str]:
        """Build the export without recording it (for download buttons)."""
        now = now or datetime.now(timezone.utc)
        exported_at = (
            now.astimezone(timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        payload = ExportPayload(
            exported_at=exported_at,
            monthly_limit=self.budget.monthly_limit,
            monthly_income=self.budget.monthly_income,
            expenses=list(self.store.expenses),
        )
        return self._settings.export_filename, payload.to_json()


def create_app_components(
    use_storage: bool = True,
) -> ExpenseTrackerController:
    """
    Factory function to create a ready controller.

    Args:
        use_storage: Whether to persist to the configured JSON file.
                    Set to False for an in-memory session.

    Returns:
        ExpenseTrackerController with state restored from storage
    """
    settings = get_settings()
    app_settings = settings.app
    storage_settings = settings.storage
    configure_logging(app_settings.log_level)

    audit_logger = AuditLogger()
    if use_storage:
        store = JsonFileKeyValueStore(
            storage_settings.data_file,
            fsync_writes=storage_settings.fsync_writes,
        )
    else:
        store = InMemoryKeyValueStore()

    storage = StorageAdapter(store, storage_settings, audit_logger)
    return ExpenseTrackerController(
        storage=storage,
        app_settings=app_settings,
        audit_logger=audit_logger,
    )
