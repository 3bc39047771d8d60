"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

import pytest

from nach_core.models import FileContext, FileType, Transaction, TransactionStatus
from nach_core.store import InMemoryTransactionStore

HEADER = "TXN_REF_NO|MANDATE_ID|ACCOUNT_NO|AMOUNT|CUSTOMER_NAME"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_file_name() -> str:
    """Debit file name following the clearing house convention."""
    return "ACH-DR-BDBL-03062024-TPZ000433633-P3FC-INW.txt"


@pytest.fixture
def sample_context(sample_file_name: str) -> FileContext:
    """File context for the sample debit file."""
    return FileContext(file_name=sample_file_name, file_type=FileType.DR, batch_no="TPZ000433633")


@pytest.fixture
def store() -> InMemoryTransactionStore:
    """Empty in-memory store."""
    return InMemoryTransactionStore()


@pytest.fixture
def make_transaction(sample_file_name: str) -> Callable[..., Transaction]:
    """Factory for transactions with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> Transaction:
        counter["n"] += 1
        values: dict[str, Any] = {
            "txn_ref_no": f"REF{counter['n']:012d}",
            "mandate_id": "MNDTABCD123456789012",
            "account_no": "1234567890",
            "amount": Decimal("100.00"),
            "status": TransactionStatus.SUCCESS,
            "file_name": sample_file_name,
            "file_type": FileType.DR,
            "batch_no": "TPZ000433633",
            "processed_date": datetime(2024, 6, 3, 10, 0, 0),
        }
        values.update(overrides)
        return Transaction(**values)

    return _make


@pytest.fixture
def build_file() -> Callable[..., bytes]:
    """Render a header plus data lines as file bytes."""

    def _build(*lines: str, header: str = HEADER) -> bytes:
        return ("\n".join([header, *lines]) + "\n").encode("utf-8")

    return _build
