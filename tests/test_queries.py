"""Tests for the query helpers: filters, report windows, summaries."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.models import SearchCriteria
from finance_tracker.queries import (
    ReportPeriod,
    criteria_from_text,
    matches_criteria,
    report_window,
    summarize,
)
from finance_tracker.queries.reports import (
    month_to_date,
    previous_month,
    previous_year,
    year_to_date,
)
from finance_tracker.storage import InvalidDateError, InvalidNumberError

from conftest import make_transaction


class TestReportWindows:
    """Tests for the standard report date ranges."""

    def test_month_to_date(self):
        window = month_to_date(date(2025, 10, 17))
        assert (window.start, window.end) == (date(2025, 10, 1), date(2025, 10, 17))

    def test_month_to_date_on_first_of_month(self):
        window = month_to_date(date(2025, 10, 1))
        assert window.start == window.end == date(2025, 10, 1)

    def test_previous_month(self):
        window = previous_month(date(2025, 10, 17))
        assert (window.start, window.end) == (date(2025, 9, 1), date(2025, 9, 30))

    def test_previous_month_in_january_rolls_back_a_year(self):
        window = previous_month(date(2025, 1, 31))
        assert (window.start, window.end) == (date(2024, 12, 1), date(2024, 12, 31))

    def test_previous_month_handles_leap_february(self):
        window = previous_month(date(2024, 3, 31))
        assert window.end == date(2024, 2, 29)

    def test_year_to_date(self):
        window = year_to_date(date(2025, 10, 17))
        assert (window.start, window.end) == (date(2025, 1, 1), date(2025, 10, 17))

    def test_previous_year(self):
        window = previous_year(date(2025, 10, 17))
        assert (window.start, window.end) == (date(2024, 1, 1), date(2024, 12, 31))

    @pytest.mark.parametrize("period", list(ReportPeriod))
    def test_report_window_dispatch(self, period):
        window = report_window(period, date(2025, 10, 17))
        assert window.start <= window.end


class TestMatchesCriteria:
    """Tests for matches_criteria."""

    def test_empty_criteria_match_anything(self):
        assert matches_criteria(make_transaction(), SearchCriteria())

    def test_each_criterion_can_exclude(self):
        t = make_transaction(date(2025, 10, 17), description="Salary", vendor="Acme", amount="500.0")
        assert not matches_criteria(t, SearchCriteria(start_date=date(2025, 10, 18)))
        assert not matches_criteria(t, SearchCriteria(end_date=date(2025, 10, 16)))
        assert not matches_criteria(t, SearchCriteria(description_keyword="rent"))
        assert not matches_criteria(t, SearchCriteria(vendor="Acme Inc"))
        assert not matches_criteria(t, SearchCriteria(exact_amount=Decimal("-500")))

    def test_exact_amount_has_no_tolerance(self):
        t = make_transaction(amount="0.30")
        assert matches_criteria(t, SearchCriteria(exact_amount=Decimal("0.3")))
        assert not matches_criteria(t, SearchCriteria(exact_amount=Decimal("0.3000001")))


class TestCriteriaFromText:
    """Tests for criteria_from_text."""

    def test_blank_answers_leave_criteria_unset(self):
        assert criteria_from_text("", "  ", "", "", "").is_empty

    def test_values_are_parsed(self):
        criteria = criteria_from_text(
            start_date="2025-01-01",
            end_date=" 2025-12-31 ",
            description_keyword="rent",
            vendor="Landlord",
            exact_amount="-1200.00",
        )
        assert criteria.start_date == date(2025, 1, 1)
        assert criteria.end_date == date(2025, 12, 31)
        assert criteria.exact_amount == Decimal("-1200.00")

    def test_invalid_date_is_reported_not_ignored(self):
        with pytest.raises(InvalidDateError) as exc_info:
            criteria_from_text(start_date="2025/01/01")
        assert exc_info.value.field == "start_date"

    def test_invalid_number_is_reported_not_ignored(self):
        with pytest.raises(InvalidNumberError):
            criteria_from_text(exact_amount="12,50")


class TestSummarize:
    """Tests for summarize."""

    def test_empty(self):
        summary = summarize([])
        assert summary.count == 0
        assert summary.net == Decimal("0")

    def test_totals_by_sign(self):
        summary = summarize([
            make_transaction(amount="100.25"),
            make_transaction(amount="-40"),
            make_transaction(amount="-0.25"),
        ])
        assert summary.deposit_count == 1
        assert summary.payment_count == 2
        assert summary.deposit_total == Decimal("100.25")
        assert summary.payment_total == Decimal("-40.25")
        assert summary.net == Decimal("60.00")
