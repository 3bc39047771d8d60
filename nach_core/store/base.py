"""Record store contract consumed by the ingestion and reprocessing services."""

from datetime import datetime
from typing import Iterable, Protocol, runtime_checkable

from nach_core.models.enums import TransactionStatus
from nach_core.models.transaction import Transaction


@runtime_checkable
class TransactionStore(Protocol):
    """Query and write operations the core needs from persistence."""

    def get_all(self) -> list[Transaction]: ...

    def get_by_ids(self, ids: Iterable[int]) -> list[Transaction]: ...

    def get_by_status(self, status: TransactionStatus) -> list[Transaction]: ...

    def get_by_date_range(self, start: datetime, end: datetime) -> list[Transaction]: ...

    def get_by_reference(self, txn_ref_no: str) -> list[Transaction]: ...

    def search(self, term: str) -> list[Transaction]: ...

    def insert(self, transaction: Transaction) -> bool: ...

    def update_status(
        self,
        transaction_id: int,
        status: TransactionStatus,
        error_code: str | None = None,
        error_desc: str | None = None,
    ) -> bool: ...
