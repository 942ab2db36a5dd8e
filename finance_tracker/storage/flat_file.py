"""
Flat-File Storage Implementation

DESIGN DECISION: A plain pipe-delimited text file is the storage backend:
1. The user can open and read their ledger in any editor
2. No database setup required
3. Appending a line is the whole write path

TRADEOFFS:
- No escaping: '|' and newlines inside text would corrupt a line
  (the ledger refuses such text before it reaches us)
- No transactions: a failed append is reported, never rolled back
- No indexing (we filter in Python; data volume is personal-scale)

MALFORMED LINES: A line with the wrong number of fields is skipped and
logged; a line with five fields that do not parse aborts the whole load.
Set strict_field_count to abort on both.
"""

from pathlib import Path
from typing import Optional, Union

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.transaction import Transaction
from finance_tracker.storage.codec import (
    FieldCountError,
    FieldParseError,
    decode_line,
    encode_line,
)
from finance_tracker.storage.interface import (
    MalformedFileError,
    StorageIOError,
    TransactionStorageInterface,
)


class FlatFileTransactionStorage(TransactionStorageInterface):
    """
    Pipe-delimited text file implementation of transaction storage.

    Transactions are stored one per line in insertion order.
    Every handle is opened and closed within a single call.
    """

    def __init__(
        self,
        path: Union[str, Path],
        encoding: str = "utf-8",
        strict_field_count: bool = False,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._path = Path(path)
        self._encoding = encoding
        self._strict_field_count = strict_field_count
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def path(self) -> Path:
        return self._path

    def _create_empty(self) -> None:
        """Create the ledger file (and its directory) so later appends succeed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
        except OSError as e:
            raise StorageIOError(
                f"Failed to create ledger file {self._path}: {e}",
                path=str(self._path),
            ) from e
        self._audit_logger.log(
            AuditEventBuilder.ledger_file_created(str(self._path))
        )

    def load(self) -> list[Transaction]:
        """Read every well-formed line of the ledger file."""
        if not self._path.exists():
            self._create_empty()
            return []

        transactions = []
        try:
            with self._path.open("r", encoding=self._encoding, newline="") as f:
                for line_number, line in enumerate(f, start=1):
                    transaction = self._decode(line, line_number)
                    if transaction is not None:
                        transactions.append(transaction)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(
                f"Failed to read ledger file {self._path}: {e}",
                path=str(self._path),
            ) from e

        return transactions

    def _decode(self, line: str, line_number: int) -> Optional[Transaction]:
        """Decode one line; None means the line was skipped."""
        try:
            return decode_line(line)
        except FieldCountError as e:
            if self._strict_field_count:
                raise MalformedFileError(
                    str(self._path), line_number, line.rstrip("\r\n"), str(e)
                ) from e
            self._audit_logger.log(
                AuditEventBuilder.malformed_line_skipped(
                    str(self._path), line_number, e.field_count
                )
            )
            return None
        except FieldParseError as e:
            raise MalformedFileError(
                str(self._path), line_number, line.rstrip("\r\n"), str(e)
            ) from e

    def append(self, transaction: Transaction) -> None:
        """Append one line and close the handle before returning."""
        try:
            with self._path.open("a", encoding=self._encoding, newline="") as f:
                f.write(encode_line(transaction) + "\n")
        except OSError as e:
            raise StorageIOError(
                f"Failed to append to ledger file {self._path}: {e}",
                path=str(self._path),
            ) from e
