"""Dashboard statistics over a set of transactions."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from nach_core.models.enums import FileType, TransactionStatus
from nach_core.models.results import DashboardStats
from nach_core.models.transaction import Transaction
from nach_core.store.base import TransactionStore


@dataclass
class TransactionFilter:
    """Optional criteria narrowing the set a dashboard is computed over."""

    status: TransactionStatus | None = None
    file_type: FileType | None = None
    search: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None

    def matches(self, transaction: Transaction) -> bool:
        if self.status is not None and transaction.status != self.status:
            return False
        if self.file_type is not None and transaction.file_type != self.file_type:
            return False
        if self.search:
            term = self.search.strip().lower()
            searchable = (
                transaction.txn_ref_no,
                transaction.mandate_id,
                transaction.account_no,
                transaction.file_name,
                transaction.error_desc,
            )
            if not any(value and term in value.lower() for value in searchable):
                return False
        if self.date_from is not None or self.date_to is not None:
            processed = transaction.processed_date
            if processed is None:
                return False
            if self.date_from is not None and processed < self.date_from:
                return False
            if self.date_to is not None and processed > self.date_to:
                return False
        return True

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        return [t for t in transactions if self.matches(t)]


def compute_stats(transactions: Iterable[Transaction]) -> DashboardStats:
    """Reduce transactions to per-status counts and amount sums in one pass.

    STUCK and FAILED amounts accumulate with ERROR; REPROCESSED amounts
    accumulate with SUCCESS. PARSE_ERROR placeholders are not counted.
    """
    counts = {
        TransactionStatus.SUCCESS: 0,
        TransactionStatus.ERROR: 0,
        TransactionStatus.STUCK: 0,
        TransactionStatus.FAILED: 0,
        TransactionStatus.REPROCESSED: 0,
    }
    success_amount = Decimal("0")
    error_amount = Decimal("0")

    for txn in transactions:
        if txn.status not in counts:
            continue
        counts[txn.status] += 1
        amount = txn.amount if txn.amount is not None else Decimal("0")
        if txn.status in (TransactionStatus.SUCCESS, TransactionStatus.REPROCESSED):
            success_amount += amount
        else:
            error_amount += amount

    return DashboardStats(
        success=counts[TransactionStatus.SUCCESS],
        error=counts[TransactionStatus.ERROR],
        stuck=counts[TransactionStatus.STUCK],
        failed=counts[TransactionStatus.FAILED],
        reprocessed=counts[TransactionStatus.REPROCESSED],
        success_amount=success_amount,
        error_amount=error_amount,
    )


class StatsService:
    """Compute dashboard snapshots from a store."""

    def __init__(self, store: TransactionStore) -> None:
        self.store = store

    def dashboard(self, filters: TransactionFilter | None = None) -> DashboardStats:
        if filters is None:
            return compute_stats(self.store.get_all())

        if filters.status is not None:
            candidates = self.store.get_by_status(filters.status)
        elif filters.date_from is not None and filters.date_to is not None:
            candidates = self.store.get_by_date_range(filters.date_from, filters.date_to)
        else:
            candidates = self.store.get_all()
        return compute_stats(filters.apply(candidates))
