"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger and every failure is logged.
This provides:
1. Traceability of what was written to the ledger file
2. Debugging capability for malformed files
3. A visible record when memory and file diverge

The audit logger is synchronous, like the rest of the ledger, and only
writes to the local structured log. It never raises.
"""

import logging
from typing import Optional, Union

import structlog

from finance_tracker.models.audit import AuditEvent, AuditSeverity


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


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Route structlog output through the standard library at `level`.

    Call once from the entrypoint; library code only emits.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Writes each event to the structured local log at the level
    matching its severity.
    """

    def __init__(self, logger_name: Optional[str] = None):
        self._logger = structlog.get_logger(logger_name or "finance_tracker.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)
