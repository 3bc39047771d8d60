"""Domain models for NACH transaction processing."""

from nach_core.models.enums import AcceptanceRule, ErrorCode, FileType, TransactionStatus
from nach_core.models.results import (
    DashboardStats,
    FileContext,
    IngestionResult,
    ParsedFile,
    ReprocessAuditEntry,
    ReprocessResult,
    ValidationResult,
)
from nach_core.models.transaction import Transaction

__all__ = [
    "AcceptanceRule",
    "DashboardStats",
    "ErrorCode",
    "FileContext",
    "FileType",
    "IngestionResult",
    "ParsedFile",
    "ReprocessAuditEntry",
    "ReprocessResult",
    "Transaction",
    "TransactionStatus",
    "ValidationResult",
]
