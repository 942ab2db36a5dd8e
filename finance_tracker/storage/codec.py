"""
Line Codec for the Ledger File

One transaction per line, five pipe-delimited fields, no header and no
escaping:

    YYYY-MM-DD|HH:MM:SS|description|vendor|amount

This module only converts between text and Transaction objects. It never
touches the filesystem, so the wire format can be tested on its own.

The field parsers are shared with the search layer, which uses them to
turn raw prompt answers into typed criteria.
"""

import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

from finance_tracker.models.transaction import (
    DATE_FORMAT,
    FIELD_DELIMITER,
    TIME_FORMAT,
    Transaction,
)


FIELD_COUNT = 5

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}$")
# Plain decimal text as str(Decimal) writes it: no underscores, no padding
_AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_TIMESTAMP_SEPARATOR = " "


class FieldParseError(ValueError):
    """A single field could not be parsed."""

    def __init__(self, field: str, value: str, message: str):
        self.field = field
        self.value = value
        super().__init__(f"{field}: {message} (got {value!r})")


class InvalidDateError(FieldParseError):
    """Text is not a valid YYYY-MM-DD calendar date."""
    pass


class InvalidTimeError(FieldParseError):
    """Text is not a valid zero-padded HH:MM:SS time."""
    pass


class InvalidNumberError(FieldParseError):
    """Text is not a finite decimal number."""
    pass


class FieldCountError(ValueError):
    """A line did not split into exactly five fields."""

    def __init__(self, field_count: int):
        self.field_count = field_count
        super().__init__(
            f"expected {FIELD_COUNT} fields, got {field_count}"
        )


def parse_date(text: str, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD date."""
    if not _DATE_PATTERN.match(text):
        raise InvalidDateError(field, text, "expected YYYY-MM-DD")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(field, text, str(e)) from e


def parse_time(text: str, field: str = "time") -> time:
    """Parse a strict 24-hour, zero-padded HH:MM:SS time."""
    if not _TIME_PATTERN.match(text):
        raise InvalidTimeError(field, text, "expected HH:MM:SS")
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError as e:
        raise InvalidTimeError(field, text, str(e)) from e


def parse_amount(text: str, field: str = "amount") -> Decimal:
    """
    Parse a finite decimal number.

    NaN, infinities, digit-group underscores and surrounding whitespace
    are all rejected, although Decimal() itself would accept them.
    """
    if not _AMOUNT_PATTERN.match(text):
        raise InvalidNumberError(field, text, "expected a plain decimal number")
    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise InvalidNumberError(field, text, "not a number") from e
    if not amount.is_finite():
        raise InvalidNumberError(field, text, "must be a finite number")
    return amount


def parse_timestamp(text: str, field: str = "timestamp") -> tuple[date, time]:
    """
    Parse a combined 'YYYY-MM-DD HH:MM:SS' entry into (date, time).

    This is the single-prompt form used when entering a new deposit or
    payment by hand.
    """
    date_text, sep, time_text = text.strip().partition(_TIMESTAMP_SEPARATOR)
    if not sep:
        raise InvalidDateError(field, text, "expected YYYY-MM-DD HH:MM:SS")
    return parse_date(date_text, field=field), parse_time(time_text.strip(), field=field)


def split_line(line: str) -> list[str]:
    """Split a line on the delimiter after dropping its line terminator."""
    return line.rstrip("\r\n").split(FIELD_DELIMITER)


def encode_line(transaction: Transaction) -> str:
    """Encode a transaction as a single line, without a terminator."""
    return transaction.to_line()


def decode_line(line: str) -> Transaction:
    """
    Decode one stored line into a Transaction.

    Raises:
        FieldCountError: The line does not have exactly five fields
        FieldParseError: A date, time or amount field does not parse
    """
    fields = split_line(line)
    if len(fields) != FIELD_COUNT:
        raise FieldCountError(len(fields))

    date_text, time_text, description, vendor, amount_text = fields
    return Transaction(
        date=parse_date(date_text),
        time=parse_time(time_text),
        description=description,
        vendor=vendor,
        amount=parse_amount(amount_text),
    )
