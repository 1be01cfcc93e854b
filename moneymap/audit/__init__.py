"""Audit logging package."""

from moneymap.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
