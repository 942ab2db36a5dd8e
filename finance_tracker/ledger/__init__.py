"""Ledger package."""

from finance_tracker.ledger.ledger import (
    InvalidAmountError,
    InvalidTextError,
    Ledger,
    LedgerError,
)

__all__ = [
    "InvalidAmountError",
    "InvalidTextError",
    "Ledger",
    "LedgerError",
]
