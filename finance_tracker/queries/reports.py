"""
Standard Report Windows and Summaries

The four canned reports are plain date ranges computed from "today".
"Today" comes from a clock callable so reports are deterministic in
tests; in production the clock is date.today.
"""

from collections.abc import Callable, Iterable
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from finance_tracker.models.search import DateRange
from finance_tracker.models.transaction import Transaction


Clock = Callable[[], date]


class ReportPeriod(str, Enum):
    """The canned date-range reports."""
    MONTH_TO_DATE = "month_to_date"
    PREVIOUS_MONTH = "previous_month"
    YEAR_TO_DATE = "year_to_date"
    PREVIOUS_YEAR = "previous_year"


def month_to_date(today: date) -> DateRange:
    return DateRange(start=today.replace(day=1), end=today)


def previous_month(today: date) -> DateRange:
    """First to last calendar day of the month before `today`'s month."""
    last_day = today.replace(day=1) - timedelta(days=1)
    return DateRange(start=last_day.replace(day=1), end=last_day)


def year_to_date(today: date) -> DateRange:
    return DateRange(start=date(today.year, 1, 1), end=today)


def previous_year(today: date) -> DateRange:
    year = today.year - 1
    return DateRange(start=date(year, 1, 1), end=date(year, 12, 31))


_WINDOWS: dict[ReportPeriod, Callable[[date], DateRange]] = {
    ReportPeriod.MONTH_TO_DATE: month_to_date,
    ReportPeriod.PREVIOUS_MONTH: previous_month,
    ReportPeriod.YEAR_TO_DATE: year_to_date,
    ReportPeriod.PREVIOUS_YEAR: previous_year,
}


def report_window(period: ReportPeriod, today: date) -> DateRange:
    """Resolve a report period to its inclusive date range."""
    return _WINDOWS[ReportPeriod(period)](today)


class LedgerSummary(BaseModel):
    """Totals over a sequence of transactions."""

    count: int = Field(ge=0)
    deposit_count: int = Field(ge=0)
    payment_count: int = Field(ge=0)
    deposit_total: Decimal = Field(
        description="Sum of positive amounts"
    )
    payment_total: Decimal = Field(
        description="Sum of negative amounts (zero or negative)"
    )

    @property
    def net(self) -> Decimal:
        return self.deposit_total + self.payment_total


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Count and total a result sequence, e.g. the output of a report."""
    count = deposit_count = payment_count = 0
    deposit_total = Decimal("0")
    payment_total = Decimal("0")

    for transaction in transactions:
        count += 1
        if transaction.is_deposit:
            deposit_count += 1
            deposit_total += transaction.amount
        elif transaction.is_payment:
            payment_count += 1
            payment_total += transaction.amount

    return LedgerSummary(
        count=count,
        deposit_count=deposit_count,
        payment_count=payment_count,
        deposit_total=deposit_total,
        payment_total=payment_total,
    )
