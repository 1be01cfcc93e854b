"""
Audit Logger

DESIGN DECISION: Every state change in the system is logged.
This provides:
1. Traceability of what the user did
2. Debugging capability when stored data is corrupt
3. Visibility into swallowed persistence errors

The audit logger:
- Is synchronous; every operation in the app is a short atomic step
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
from typing import Optional

import structlog

from moneymap.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route the structured log to stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))


class AuditLogger:
    """
    Central audit logging service.

    Writes every event to the structured local log. The last events are
    also kept in memory so the UI (and tests) can show recent activity.
    """

    def __init__(self, history_size: int = 50):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = structlog.get_logger("moneymap.audit")
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._history))

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log write failed; never raises.
        """
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[0]

        log_dict = event.to_log_dict()
        try:
            if event.severity.value in ("error", "critical"):
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # A broken log handler must not break the app
            return False
        return True

    def log_expense_added(
        self,
        expense_id: int,
        amount: str,
        category: str,
        expense_date: str,
    ) -> None:
        """Log a new expense."""
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            amount=amount,
            category=category,
            expense_date=expense_date,
        ))

    def log_expense_deleted(self, expense_id: int, found: bool) -> None:
        """Log an expense deletion (or a no-op delete)."""
        self.log(AuditEventBuilder.expense_deleted(expense_id=expense_id, found=found))

    def log_expenses_cleared(self, count: int) -> None:
        """Log a clear-all."""
        self.log(AuditEventBuilder.expenses_cleared(count=count))

    def log_setting_updated(self, name: str, value: Optional[str]) -> None:
        """Log a limit or income change."""
        self.log(AuditEventBuilder.setting_updated(name=name, value=value))

    def log_theme_changed(self, theme: str) -> None:
        """Log a theme toggle."""
        self.log(AuditEventBuilder.theme_changed(theme=theme))

    def log_validation_failed(self, field: str, message: str) -> None:
        """Log a rejected form submission."""
        self.log(AuditEventBuilder.validation_failed(field=field, message=message))

    def log_data_exported(self, expense_count: int, filename: str) -> None:
        """Log an export."""
        self.log(AuditEventBuilder.data_exported(
            expense_count=expense_count,
            filename=filename,
        ))

    def log_storage_load_failed(self, key: str, error_message: str) -> None:
        """Log a storage read/parse failure that fell back to defaults."""
        self.log(AuditEventBuilder.storage_load_failed(key=key, error_message=error_message))

    def log_storage_save_failed(self, key: str, error_message: str) -> None:
        """Log a storage write failure."""
        self.log(AuditEventBuilder.storage_save_failed(key=key, error_message=error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
