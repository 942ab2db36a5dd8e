"""
Data Models Package

This package contains the Pydantic models used in the Finance Tracker.
All data flowing through the ledger conforms to these schemas.
"""

from finance_tracker.models.transaction import Transaction
from finance_tracker.models.search import DateRange, SearchCriteria
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Transaction",
    "DateRange",
    "SearchCriteria",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
