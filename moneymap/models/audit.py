"""
Audit Models for MoneyMap

Every state change in the app is logged as an audit event.
This provides:
1. A readable history of what the user did
2. Debugging information when stored data turns out corrupt
3. A single place where persistence failures become visible

DESIGN DECISION: Audit events only go to the structured log.
They are never written into the user's data file.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense store
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_CLEARED = "expenses_cleared"

    # Settings
    LIMIT_UPDATED = "limit_updated"
    INCOME_UPDATED = "income_updated"
    THEME_CHANGED = "theme_changed"

    # User input
    VALIDATION_FAILED = "validation_failed"

    # Export
    DATA_EXPORTED = "data_exported"

    # Persistence
    STORAGE_LOAD_FAILED = "storage_load_failed"
    STORAGE_SAVE_FAILED = "storage_save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'settings', 'storage')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, amount, category, date)
        event = AuditEventBuilder.storage_save_failed(key, error_message)
    """

    @staticmethod
    def expense_added(
        expense_id: int,
        amount: str,
        category: str,
        expense_date: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense added: {category} - {amount}",
            details={
                "amount": amount,
                "category": category,
                "date": expense_date,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: int, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=(
                "Expense deleted" if found else "Delete requested for unknown expense"
            ),
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def expenses_cleared(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"All expenses cleared ({count} removed)",
            details={"removed": count},
            is_user_action=True,
        )

    @staticmethod
    def setting_updated(name: str, value: Optional[str]) -> AuditEvent:
        event_type = (
            AuditEventType.LIMIT_UPDATED
            if name == "monthly_limit"
            else AuditEventType.INCOME_UPDATED
        )
        return AuditEvent(
            event_type=event_type,
            entity_type="settings",
            entity_id=name,
            description=f"{name} set to {value if value is not None else 'unset'}",
            details={"value": value},
            is_user_action=True,
        )

    @staticmethod
    def theme_changed(theme: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_CHANGED,
            entity_type="settings",
            entity_id="theme",
            description=f"Theme changed to {theme}",
            details={"theme": theme},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(field: str, message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="form",
            description=f"Expense form rejected: {message}",
            details={"field": field},
            is_user_action=True,
        )

    @staticmethod
    def data_exported(expense_count: int, filename: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_EXPORTED,
            entity_type="export",
            description=f"Exported {expense_count} expenses to {filename}",
            details={
                "expense_count": expense_count,
                "filename": filename,
            },
            is_user_action=True,
        )

    @staticmethod
    def storage_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Could not restore '{key}', using default",
            error_message=error_message,
        )

    @staticmethod
    def storage_save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Could not persist '{key}'",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
