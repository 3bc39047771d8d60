"""In-memory transaction store with reference-number uniqueness."""

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

from nach_core.models.enums import TransactionStatus
from nach_core.models.transaction import Transaction

logger = logging.getLogger(__name__)


@dataclass
class InMemoryTransactionStore:
    """Dictionary-backed store; returns copies so callers write through ``update_status``."""

    transactions: dict[int, Transaction] = field(default_factory=dict)

    _by_reference: dict[str, int] = field(default_factory=dict)
    _next_id: int = 1
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def insert(self, transaction: Transaction) -> bool:
        """Insert a transaction and assign its id; False on duplicate reference."""
        with self._lock:
            if transaction.txn_ref_no in self._by_reference:
                logger.warning("Duplicate transaction reference %s rejected", transaction.txn_ref_no)
                return False
            stored = replace(transaction, id=self._next_id)
            self._next_id += 1
            self.transactions[stored.id] = stored
            self._by_reference[stored.txn_ref_no] = stored.id
            transaction.id = stored.id
            return True

    def update_status(
        self,
        transaction_id: int,
        status: TransactionStatus,
        error_code: str | None = None,
        error_desc: str | None = None,
    ) -> bool:
        """Overwrite status and error fields and refresh ``updated_at``."""
        with self._lock:
            stored = self.transactions.get(transaction_id)
            if stored is None:
                return False
            stored.status = status
            stored.error_code = error_code
            stored.error_desc = error_desc
            stored.touch()
            return True

    # Query methods
    def get(self, transaction_id: int) -> Transaction | None:
        with self._lock:
            stored = self.transactions.get(transaction_id)
            return replace(stored) if stored is not None else None

    def get_all(self) -> list[Transaction]:
        with self._lock:
            return [replace(t) for t in self.transactions.values()]

    def get_by_ids(self, ids: Iterable[int]) -> list[Transaction]:
        """Existing transactions for ``ids`` in request order; unknown ids are dropped."""
        with self._lock:
            seen: set[int] = set()
            found = []
            for txn_id in ids:
                if txn_id in seen or txn_id not in self.transactions:
                    continue
                seen.add(txn_id)
                found.append(replace(self.transactions[txn_id]))
            return found

    def get_by_status(self, status: TransactionStatus) -> list[Transaction]:
        with self._lock:
            return [replace(t) for t in self.transactions.values() if t.status == status]

    def get_by_date_range(self, start: datetime, end: datetime) -> list[Transaction]:
        """Transactions whose processed date falls within ``[start, end]``."""
        with self._lock:
            return [
                replace(t)
                for t in self.transactions.values()
                if t.processed_date is not None and start <= t.processed_date <= end
            ]

    def get_by_reference(self, txn_ref_no: str) -> list[Transaction]:
        with self._lock:
            txn_id = self._by_reference.get(txn_ref_no)
            return [replace(self.transactions[txn_id])] if txn_id is not None else []

    def search(self, term: str) -> list[Transaction]:
        """Case-insensitive substring match on reference, mandate and account."""
        needle = term.strip().lower()
        if not needle:
            return []
        with self._lock:
            return [
                replace(t)
                for t in self.transactions.values()
                if any(
                    value and needle in value.lower()
                    for value in (t.txn_ref_no, t.mandate_id, t.account_no)
                )
            ]

    def summary(self) -> dict[str, int]:
        """Return record counts per status."""
        with self._lock:
            counts = {status.value: 0 for status in TransactionStatus}
            for t in self.transactions.values():
                counts[t.status.value] += 1
            return counts
