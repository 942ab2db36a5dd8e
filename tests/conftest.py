"""Shared fixtures for the Finance Tracker tests."""

from datetime import date, time
from decimal import Decimal

import pytest

from finance_tracker.config import get_settings
from finance_tracker.ledger import Ledger
from finance_tracker.models.transaction import Transaction
from finance_tracker.storage import StorageIOError, TransactionStorageInterface


TODAY = date(2025, 10, 17)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Storage double that keeps appended transactions in a list."""

    def __init__(self, transactions=None):
        self.transactions = list(transactions or [])

    def load(self):
        return list(self.transactions)

    def append(self, transaction):
        self.transactions.append(transaction)


class FailingAppendStorage(InMemoryTransactionStorage):
    """Storage double whose appends always fail."""

    def append(self, transaction):
        raise StorageIOError("disk full")


def make_transaction(
    day=TODAY,
    at=time(10, 0, 0),
    description="Salary",
    vendor="Acme",
    amount="500.0",
):
    return Transaction(
        date=day,
        time=at,
        description=description,
        vendor=vendor,
        amount=Decimal(amount),
    )


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def sample_transactions():
    return [
        make_transaction(date(2025, 10, 1), time(9, 0, 0), "Salary", "Acme", "2500.00"),
        make_transaction(date(2025, 10, 3), time(12, 30, 0), "Groceries", "FreshMart", "-82.45"),
        make_transaction(date(2025, 9, 15), time(18, 5, 9), "Coffee beans", "acme", "-12.5"),
        make_transaction(date(2025, 9, 30), time(23, 59, 59), "Refund", "FreshMart", "20"),
        make_transaction(date(2024, 12, 31), time(8, 0, 0), "Rent", "Landlord", "-1200"),
        make_transaction(date(2024, 1, 1), time(0, 0, 0), "Bonus", "ACME", "300.0"),
    ]


@pytest.fixture
def memory_storage(sample_transactions):
    return InMemoryTransactionStorage(sample_transactions)


@pytest.fixture
def ledger(memory_storage, clock):
    return Ledger.load(memory_storage, clock=clock)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
