"""Enumeration types for NACH transaction records."""

from enum import Enum


class TransactionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    STUCK = "STUCK"
    FAILED = "FAILED"
    REPROCESSED = "REPROCESSED"
    PARSE_ERROR = "PARSE_ERROR"


class FileType(str, Enum):
    DR = "DR"  # Debit
    CR = "CR"  # Credit


class AcceptanceRule(str, Enum):
    """Rule used to accept a line at ingestion and again at reprocessing."""

    MINIMAL = "MINIMAL"
    STRICT = "STRICT"


class ErrorCode(str, Enum):
    INSUFFICIENT_BALANCE = "E001"
    TECHNICAL_ISSUE = "E002"
    INVALID_MANDATE = "E003"
    ACCOUNT_CLOSED = "E004"
    INVALID_AMOUNT = "E005"
    DUPLICATE_TRANSACTION = "E006"
    SYSTEM_TIMEOUT = "E007"
    NETWORK_ERROR = "E008"
    VALIDATION_FAILED = "E009"
    FILE_FORMAT_ERROR = "E010"
    MANDATE_EXPIRED = "E011"
    BANK_HOLIDAY = "E012"
