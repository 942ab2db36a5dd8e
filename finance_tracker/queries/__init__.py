"""Query package: transaction filters, report windows and summaries."""

from finance_tracker.queries.filters import (
    criteria_from_text,
    matches_criteria,
    select,
)
from finance_tracker.queries.reports import (
    Clock,
    LedgerSummary,
    ReportPeriod,
    report_window,
    summarize,
)

__all__ = [
    "Clock",
    "LedgerSummary",
    "ReportPeriod",
    "criteria_from_text",
    "matches_criteria",
    "report_window",
    "select",
    "summarize",
]
