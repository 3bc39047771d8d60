"""Ephemeral result values produced by the parsing and reprocessing layers."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from nach_core.models.enums import FileType, TransactionStatus
from nach_core.models.transaction import Transaction


@dataclass
class ValidationResult:
    """Outcome of a validation check: validity flag plus ordered messages."""

    valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=list(errors))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None

    @property
    def error_message(self) -> str:
        """All messages joined for display."""
        return ", ".join(self.errors)


@dataclass
class FileContext:
    """File-level values shared by every line of one batch file."""

    file_name: str
    file_type: FileType
    batch_no: str


@dataclass
class ParsedFile:
    """Ordered parser output for one batch file."""

    context: FileContext
    transactions: list[Transaction] = field(default_factory=list)
    truncated: bool = False

    @property
    def total_count(self) -> int:
        return len(self.transactions)

    @property
    def valid_count(self) -> int:
        """Entries that are real transactions (everything but PARSE_ERROR)."""
        return sum(1 for t in self.transactions if not t.is_parse_error)

    @property
    def parse_error_count(self) -> int:
        return self.total_count - self.valid_count


@dataclass
class IngestionResult:
    """Summary of one file ingested into a store."""

    file_name: str
    file_type: FileType
    batch_no: str
    transaction_count: int
    valid_count: int
    parse_error_count: int
    inserted_count: int
    failed_count: int
    truncated: bool = False


@dataclass
class ReprocessAuditEntry:
    """One successful REPROCESSED transition."""

    transaction_id: int
    txn_ref_no: str
    previous_status: TransactionStatus
    new_status: TransactionStatus
    actor: str
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class ReprocessResult:
    """Tally for one reprocess request."""

    actor: str
    reason: str
    success_count: int = 0
    total_count: int = 0
    failed_count: int = 0
    skipped_ids: list[int] = field(default_factory=list)
    audit: list[ReprocessAuditEntry] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardStats:
    """Per-status counts and amount sums for a set of transactions."""

    success: int = 0
    error: int = 0
    stuck: int = 0
    failed: int = 0
    reprocessed: int = 0
    success_amount: Decimal = Decimal("0")
    error_amount: Decimal = Decimal("0")

    @property
    def total(self) -> int:
        return self.success + self.error + self.stuck + self.failed + self.reprocessed

    @property
    def total_amount(self) -> Decimal:
        return self.success_amount + self.error_amount

    @property
    def success_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.success + self.reprocessed) * 100 / self.total

    @property
    def error_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.error + self.stuck + self.failed) * 100 / self.total
