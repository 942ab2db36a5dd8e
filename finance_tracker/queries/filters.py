"""
Transaction Filters

DESIGN DECISION: Matching is DETERMINISTIC and side-effect free.
Each predicate answers one question about one transaction; the ledger
composes them and scans its entries in order. Results are never
re-sorted.

MATCHING RULES:
- Date bounds are inclusive at both ends
- Vendor is a case-insensitive EXACT match (not a substring)
- Description keyword is a case-insensitive SUBSTRING match
- Amount is exact Decimal equality with the stored, signed amount
"""

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

from finance_tracker.models.search import SearchCriteria
from finance_tracker.models.transaction import Transaction
from finance_tracker.storage.codec import parse_amount, parse_date


TransactionPredicate = Callable[[Transaction], bool]


def in_date_range(
    transaction: Transaction,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> bool:
    """True if start <= transaction.date <= end; a missing bound is open."""
    if start is not None and transaction.date < start:
        return False
    if end is not None and transaction.date > end:
        return False
    return True


def vendor_matches(transaction: Transaction, vendor: str) -> bool:
    return transaction.vendor.casefold() == vendor.casefold()


def description_contains(transaction: Transaction, keyword: str) -> bool:
    return keyword.casefold() in transaction.description.casefold()


def amount_equals(transaction: Transaction, amount: Decimal) -> bool:
    # Decimal equality ignores trailing zeros: 500 == 500.0 == 500.00
    return transaction.amount == amount


def matches_criteria(transaction: Transaction, criteria: SearchCriteria) -> bool:
    """
    True if every criterion that is set matches.

    Unset criteria are vacuously true, so empty criteria match everything.
    """
    if not in_date_range(transaction, criteria.start_date, criteria.end_date):
        return False
    if (
        criteria.description_keyword is not None
        and not description_contains(transaction, criteria.description_keyword)
    ):
        return False
    if criteria.vendor is not None and not vendor_matches(transaction, criteria.vendor):
        return False
    if (
        criteria.exact_amount is not None
        and not amount_equals(transaction, criteria.exact_amount)
    ):
        return False
    return True


def select(
    transactions: Iterable[Transaction],
    predicate: TransactionPredicate,
) -> list[Transaction]:
    """Materialize the matching transactions, preserving order."""
    return [t for t in transactions if predicate(t)]


def criteria_from_text(
    start_date: str = "",
    end_date: str = "",
    description_keyword: str = "",
    vendor: str = "",
    exact_amount: str = "",
) -> SearchCriteria:
    """
    Build search criteria from raw prompt answers.

    Blank answers leave the criterion unset. A date or amount that does
    not parse raises InvalidDateError / InvalidNumberError naming the
    offending criterion; it is never silently dropped.
    """
    return SearchCriteria(
        start_date=(
            parse_date(start_date.strip(), field="start_date")
            if start_date.strip() else None
        ),
        end_date=(
            parse_date(end_date.strip(), field="end_date")
            if end_date.strip() else None
        ),
        description_keyword=description_keyword or None,
        vendor=vendor or None,
        exact_amount=(
            parse_amount(exact_amount.strip(), field="exact_amount")
            if exact_amount.strip() else None
        ),
    )
