"""
The Ledger

An in-memory, ordered collection of transactions backed by a storage
implementation. The caller owns the Ledger object and passes it around;
there is no process-wide instance.

ORDER: Load order first, then append order. Queries never re-sort.

ADD FLOW:
1. Validate (amount > 0, text safe for the file format)
2. Build the Transaction (payments are negated here)
3. Append to memory
4. Append to storage

Validation happens before any mutation. Steps 3 and 4 are NOT atomic:
if the storage append fails, the error is raised and memory stays one
entry ahead of the file. Call reload() to resynchronise.
"""

from collections.abc import Iterator
from datetime import date, time
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from finance_tracker.audit import AuditLogger
from finance_tracker.config import LedgerSettings, get_settings
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.search import DateRange, SearchCriteria
from finance_tracker.models.transaction import FIELD_DELIMITER, Transaction
from finance_tracker.queries.filters import (
    criteria_from_text,
    in_date_range,
    matches_criteria,
    select,
    vendor_matches,
)
from finance_tracker.queries.reports import (
    Clock,
    LedgerSummary,
    ReportPeriod,
    report_window,
    summarize,
)
from finance_tracker.storage import (
    FieldParseError,
    FlatFileTransactionStorage,
    StorageError,
    TransactionStorageInterface,
)


_FORBIDDEN_TEXT = (FIELD_DELIMITER, "\n", "\r")


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidAmountError(LedgerError):
    """A deposit or payment amount was not a positive number."""

    def __init__(self, amount: Any, reason: str):
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class InvalidTextError(LedgerError):
    """A description or vendor contains text the file format cannot hold."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(
            f"{field} must not contain '|' or line breaks (got {value!r})"
        )


class Ledger:
    """
    Ordered, in-memory transactions with validated mutation and
    read-only queries.

    Every query returns a new list; the internal sequence is never exposed.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        transactions: Optional[list[Transaction]] = None,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize a ledger.

        Args:
            storage: Where new transactions are persisted
            transactions: Already-loaded transactions, in stored order
            clock: Returns "today" for the standard reports
            audit_logger: Audit sink; a local-only logger if omitted
        """
        self._storage = storage
        self._transactions: list[Transaction] = list(transactions or [])
        self._clock = clock or date.today
        self._audit_logger = audit_logger or AuditLogger()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        storage: TransactionStorageInterface,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> 'Ledger':
        """
        Build a ledger from everything in `storage`.

        Raises:
            MalformedFileError: A stored line did not parse (load aborted)
            StorageIOError: The backing file could not be created or read
        """
        ledger = cls(storage, clock=clock, audit_logger=audit_logger)
        ledger.reload()
        return ledger

    @classmethod
    def open(
        cls,
        settings: Optional[LedgerSettings] = None,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> 'Ledger':
        """Load the flat-file ledger named by the application settings."""
        settings = settings or get_settings()
        audit_logger = audit_logger or AuditLogger()
        storage = FlatFileTransactionStorage(
            settings.ledger_file,
            encoding=settings.file_encoding,
            strict_field_count=settings.strict_field_count,
            audit_logger=audit_logger,
        )
        return cls.load(storage, clock=clock, audit_logger=audit_logger)

    def reload(self) -> None:
        """
        Replace the in-memory sequence with the storage contents.

        On failure the current in-memory sequence is left untouched.
        """
        location = str(getattr(self._storage, "path", type(self._storage).__name__))
        try:
            transactions = self._storage.load()
        except StorageError as e:
            self._audit_logger.log(
                AuditEventBuilder.ledger_load_failed(location, str(e))
            )
            raise
        self._transactions = transactions
        self._audit_logger.log(
            AuditEventBuilder.ledger_loaded(location, len(transactions))
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_deposit(
        self,
        date: date,
        time: time,
        description: str,
        vendor: str,
        amount: Any,
    ) -> Transaction:
        """
        Record money coming in. The amount is stored unchanged.

        Raises:
            InvalidAmountError: amount is not a positive number
            InvalidTextError: description or vendor would corrupt the file
            StorageError: the append failed (memory already updated)
        """
        value = self._validate_amount(amount, kind="deposit")
        self._validate_text(description, vendor, kind="deposit")
        return self._record(Transaction(
            date=date,
            time=time,
            description=description,
            vendor=vendor,
            amount=value,
        ))

    def add_payment(
        self,
        date: date,
        time: time,
        description: str,
        vendor: str,
        amount: Any,
    ) -> Transaction:
        """
        Record money going out.

        The caller supplies a positive magnitude; it is stored negated.
        Raises the same errors as add_deposit.
        """
        value = self._validate_amount(amount, kind="payment")
        self._validate_text(description, vendor, kind="payment")
        return self._record(Transaction(
            date=date,
            time=time,
            description=description,
            vendor=vendor,
            # copy_negate is exact; unary minus rounds to the context precision
            amount=value.copy_negate(),
        ))

    def _validate_amount(self, amount: Any, kind: str) -> Decimal:
        """Coerce to Decimal and require a finite, positive value."""
        if isinstance(amount, bool):
            raise self._amount_error(amount, kind, "not a number")
        try:
            if isinstance(amount, float):
                # Go through repr so 0.1 stays 0.1, not its binary expansion
                value = Decimal(repr(amount))
            else:
                value = Decimal(amount)
        except (InvalidOperation, TypeError, ValueError):
            raise self._amount_error(amount, kind, "not a number")

        if not value.is_finite():
            raise self._amount_error(amount, kind, "must be a finite number")
        if value <= 0:
            raise self._amount_error(amount, kind, "must be positive")
        return value

    def _amount_error(self, amount: Any, kind: str, reason: str) -> InvalidAmountError:
        self._audit_logger.log(
            AuditEventBuilder.amount_rejected(kind, amount, reason)
        )
        return InvalidAmountError(amount, reason)

    def _validate_text(self, description: str, vendor: str, kind: str) -> None:
        for field, value in (("description", description), ("vendor", vendor)):
            if any(ch in value for ch in _FORBIDDEN_TEXT):
                error = InvalidTextError(field, value)
                self._audit_logger.log(
                    AuditEventBuilder.text_rejected(kind, field, str(error))
                )
                raise error

    def _record(self, transaction: Transaction) -> Transaction:
        """Append to memory, then to storage. Memory is not rolled back."""
        self._transactions.append(transaction)
        try:
            self._storage.append(transaction)
        except StorageError as e:
            self._audit_logger.log(
                AuditEventBuilder.append_failed(transaction, str(e))
            )
            raise
        self._audit_logger.log(AuditEventBuilder.transaction_added(transaction))
        return transaction

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

    def _audit_query(
        self,
        query_type: str,
        results: list[Transaction],
        **filters: Any,
    ) -> list[Transaction]:
        self._audit_logger.log(
            AuditEventBuilder.query_executed(query_type, len(results), **filters)
        )
        return results

    def all(self) -> list[Transaction]:
        """Every transaction, unfiltered."""
        return self._audit_query("all", list(self._transactions))

    def deposits(self) -> list[Transaction]:
        """Transactions with a positive amount."""
        return self._audit_query(
            "deposits", select(self._transactions, lambda t: t.is_deposit)
        )

    def payments(self) -> list[Transaction]:
        """Transactions with a negative amount."""
        return self._audit_query(
            "payments", select(self._transactions, lambda t: t.is_payment)
        )

    def by_date_range(self, start: date, end: date) -> list[Transaction]:
        """Transactions dated start..end inclusive. Empty if start > end."""
        results = select(
            self._transactions, lambda t: in_date_range(t, start, end)
        )
        return self._audit_query("by_date_range", results, start=start, end=end)

    def report(self, period: ReportPeriod) -> list[Transaction]:
        """Run one of the standard reports against today's date."""
        window = self.report_window(period)
        return self.by_date_range(window.start, window.end)

    def report_window(self, period: ReportPeriod) -> DateRange:
        """The date range a standard report covers, as of today."""
        return report_window(period, self._clock())

    def month_to_date(self) -> list[Transaction]:
        return self.report(ReportPeriod.MONTH_TO_DATE)

    def previous_month(self) -> list[Transaction]:
        return self.report(ReportPeriod.PREVIOUS_MONTH)

    def year_to_date(self) -> list[Transaction]:
        return self.report(ReportPeriod.YEAR_TO_DATE)

    def previous_year(self) -> list[Transaction]:
        return self.report(ReportPeriod.PREVIOUS_YEAR)

    def by_vendor(self, name: str) -> list[Transaction]:
        """Case-insensitive exact vendor match."""
        results = select(self._transactions, lambda t: vendor_matches(t, name))
        return self._audit_query("by_vendor", results, vendor=name)

    def custom_search(self, criteria: SearchCriteria) -> list[Transaction]:
        """Transactions matching every criterion that is set."""
        results = select(
            self._transactions, lambda t: matches_criteria(t, criteria)
        )
        return self._audit_query(
            "custom_search", results, **criteria.model_dump()
        )

    def parse_criteria(self, **raw: str) -> SearchCriteria:
        """
        Build SearchCriteria from raw prompt answers, auditing rejections.

        Raises:
            InvalidDateError: start_date or end_date did not parse
            InvalidNumberError: exact_amount did not parse
        """
        try:
            return criteria_from_text(**raw)
        except FieldParseError as e:
            self._audit_logger.log(
                AuditEventBuilder.criterion_rejected(e.field, e.value, str(e))
            )
            raise

    def summary(self, transactions: Optional[list[Transaction]] = None) -> LedgerSummary:
        """Totals for `transactions`, or for the whole ledger."""
        if transactions is None:
            transactions = self._transactions
        return summarize(transactions)
