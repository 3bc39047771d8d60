"""Transaction model for NACH clearing batches."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from nach_core.models.enums import FileType, TransactionStatus


@dataclass
class Transaction:
    """One clearing transaction decoded from a batch file line."""

    txn_ref_no: str
    mandate_id: str | None
    account_no: str | None
    amount: Decimal | None
    status: TransactionStatus
    file_name: str
    file_type: FileType
    batch_no: str

    error_code: str | None = None
    error_desc: str | None = None

    # Assigned by the store on insert
    id: int | None = None

    # Optional trailing line fields
    customer_name: str | None = None
    sponsor_bank: str | None = None
    destination_bank: str | None = None
    transaction_date: str | None = None
    purpose_code: str | None = None

    processed_date: datetime | None = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_parse_error(self) -> bool:
        return self.status == TransactionStatus.PARSE_ERROR

    def touch(self) -> None:
        """Refresh the updated timestamp."""
        self.updated_at = datetime.now()
