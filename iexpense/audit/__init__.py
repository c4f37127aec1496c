"""Audit logging package."""

from iexpense.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
