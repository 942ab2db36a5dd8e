"""
Core Data Model for Finance Tracker

A Transaction is one line of the ledger: when it happened, what it was,
who it was with, and how much money moved.

SIGN CONVENTION: amount > 0 is a deposit, amount < 0 is a payment.
Payments are entered as positive magnitudes and negated by the ledger
before a Transaction is built.

DESIGN DECISION: Amounts are Decimal, not float. The file stores the
decimal text exactly, so a value read back compares equal to the value
written, and exact-amount searches behave predictably.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


FIELD_DELIMITER = "|"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


class Transaction(BaseModel):
    """
    A single ledger entry.

    Immutable once created. Construction only coerces types; business
    rules (positive amounts, safe text) are enforced by the Ledger.
    """
    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    time: datetime.time = Field(
        ...,
        description="Wall-clock time, second precision"
    )
    description: str = Field(
        ...,
        description="Free-text description"
    )
    vendor: str = Field(
        ...,
        description="Payee or payor"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount: positive = deposit, negative = payment"
    )

    @field_validator('time')
    @classmethod
    def truncate_to_seconds(cls, v: datetime.time) -> datetime.time:
        """The file stores HH:MM:SS only; drop sub-second precision and tzinfo."""
        return v.replace(microsecond=0, tzinfo=None)

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_payment(self) -> bool:
        return self.amount < 0

    def to_line(self) -> str:
        """
        Canonical single-line form, as written to the ledger file.

        Example: 2025-10-17|14:30:00|Salary|Company|500.0
        """
        return FIELD_DELIMITER.join([
            self.date.strftime(DATE_FORMAT),
            self.time.strftime(TIME_FORMAT),
            self.description,
            self.vendor,
            str(self.amount),
        ])

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "date": self.date.isoformat(),
            "time": self.time.strftime(TIME_FORMAT),
            "description": self.description,
            "vendor": self.vendor,
            "amount": str(self.amount),
        }
