"""
Storage Package

Provides the abstract storage interface, the line codec, and the
flat-file implementation used by the ledger.
"""

from finance_tracker.storage.interface import (
    MalformedFileError,
    StorageError,
    StorageIOError,
    TransactionStorageInterface,
)
from finance_tracker.storage.codec import (
    FieldCountError,
    FieldParseError,
    InvalidDateError,
    InvalidNumberError,
    InvalidTimeError,
    decode_line,
    encode_line,
    parse_amount,
    parse_date,
    parse_time,
    parse_timestamp,
)
from finance_tracker.storage.flat_file import FlatFileTransactionStorage

__all__ = [
    # Interface
    "TransactionStorageInterface",
    # Exceptions
    "MalformedFileError",
    "StorageError",
    "StorageIOError",
    "FieldCountError",
    "FieldParseError",
    "InvalidDateError",
    "InvalidNumberError",
    "InvalidTimeError",
    # Codec
    "decode_line",
    "encode_line",
    "parse_amount",
    "parse_date",
    "parse_time",
    "parse_timestamp",
    # Flat-file implementation
    "FlatFileTransactionStorage",
]
