"""
Audit Models for Finance Tracker

Every mutation of the ledger, and every failure on the way, is logged
as a structured audit event. This provides:
1. Traceability of what was added and when
2. Debugging information when a load or append goes wrong
3. A record of memory/file divergence after a failed append

DESIGN DECISION: Audit events are emitted, never edited.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from finance_tracker.models.transaction import Transaction


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    LEDGER_FILE_CREATED = "ledger_file_created"
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"
    MALFORMED_LINE_SKIPPED = "malformed_line_skipped"

    # Mutation
    DEPOSIT_ADDED = "deposit_added"
    PAYMENT_ADDED = "payment_added"
    AMOUNT_REJECTED = "amount_rejected"
    TEXT_REJECTED = "text_rejected"
    APPEND_FAILED = "append_failed"

    # Queries
    QUERY_EXECUTED = "query_executed"
    CRITERION_REJECTED = "criterion_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
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

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.ledger_loaded(path, 12)
        event = AuditEventBuilder.transaction_added(transaction)
    """

    @staticmethod
    def ledger_file_created(path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_FILE_CREATED,
            description=f"Created empty ledger file: {path}",
            details={"path": path},
        )

    @staticmethod
    def ledger_loaded(path: str, transaction_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description=f"Loaded {transaction_count} transactions",
            details={
                "path": path,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def ledger_load_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description="Ledger load aborted",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def malformed_line_skipped(
        path: str,
        line_number: int,
        field_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MALFORMED_LINE_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Skipped line {line_number}: expected 5 fields, got {field_count}",
            details={
                "path": path,
                "line_number": line_number,
                "field_count": field_count,
            },
        )

    @staticmethod
    def transaction_added(transaction: Transaction) -> AuditEvent:
        if transaction.is_payment:
            event_type = AuditEventType.PAYMENT_ADDED
            kind = "Payment"
        else:
            event_type = AuditEventType.DEPOSIT_ADDED
            kind = "Deposit"
        return AuditEvent(
            event_type=event_type,
            description=f"{kind} recorded: {transaction.vendor} {transaction.amount}",
            details=transaction.to_log_dict(),
        )

    @staticmethod
    def amount_rejected(kind: str, amount: Any, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Rejected {kind} amount: {amount}",
            details={
                "kind": kind,
                "amount": str(amount),
            },
            error_message=reason,
        )

    @staticmethod
    def text_rejected(kind: str, field: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TEXT_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Rejected {kind} {field}",
            details={
                "kind": kind,
                "field": field,
            },
            error_message=reason,
        )

    @staticmethod
    def append_failed(transaction: Transaction, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.APPEND_FAILED,
            severity=AuditSeverity.ERROR,
            description="Append failed; in-memory ledger is ahead of the file",
            details=transaction.to_log_dict(),
            error_message=error_message,
        )

    @staticmethod
    def query_executed(query_type: str, result_count: int, **filters: Any) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_EXECUTED,
            severity=AuditSeverity.DEBUG,
            description=f"Query executed: {query_type} returned {result_count} results",
            details={
                "query_type": query_type,
                "result_count": result_count,
                "filters": {k: str(v) for k, v in filters.items() if v is not None},
            },
        )

    @staticmethod
    def criterion_rejected(field: str, value: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CRITERION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Invalid search criterion: {field}",
            details={
                "field": field,
                "value": value,
            },
            error_message=error_message,
        )
