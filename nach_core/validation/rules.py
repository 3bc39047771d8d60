"""Record, file and request validation producing ValidationResult values."""

from typing import Any

from nach_core.config import UploadConfig
from nach_core.models.results import ValidationResult
from nach_core.models.transaction import Transaction
from nach_core.validation import fields as f

MIN_FIELDS_COUNT = 4
MAX_REPORTED_LINE_ERRORS = 10
HEADER_KEYWORDS = ("TXN", "MANDATE", "ACCOUNT", "AMOUNT")


def file_extension(file_name: str | None) -> str:
    """Lower-cased extension without the dot, or "" when there is none."""
    if not file_name or not file_name.strip():
        return ""
    dot = file_name.rfind(".")
    if 0 < dot < len(file_name) - 1:
        return file_name[dot + 1 :].lower()
    return ""


def validate_upload(file_name: str | None, size: int, config: UploadConfig) -> ValidationResult:
    """Check an uploaded file against the caller's limits and the naming convention."""
    errors: list[str] = []
    if not file_name or not file_name.strip():
        return ValidationResult(False, ["File name cannot be empty"])

    if not config.is_extension_allowed(file_extension(file_name)):
        allowed = ", ".join(config.allowed_extensions)
        errors.append(f"Invalid file extension for {file_name}: allowed {allowed}")
    if size <= 0:
        errors.append("File is empty")
    elif size > config.max_upload_size:
        errors.append(f"File size {size} exceeds maximum limit of {config.max_upload_size} bytes")
    if not f.is_valid_nach_file_name(file_name):
        errors.append(f"Invalid NACH file name format: {file_name}")

    return ValidationResult.from_errors(errors)


def validate_transaction(transaction: Transaction | None) -> ValidationResult:
    """Run every field rule over a decoded transaction."""
    if transaction is None:
        return ValidationResult(False, ["Transaction cannot be null"])

    errors: list[str] = []
    if not f.is_valid_txn_ref_no(transaction.txn_ref_no):
        errors.append(f"Invalid transaction reference number: {transaction.txn_ref_no}")
    if not f.is_valid_mandate_id(transaction.mandate_id):
        errors.append(f"Invalid mandate ID: {transaction.mandate_id}")
    if not f.is_valid_account_number(transaction.account_no):
        errors.append(f"Invalid account number: {transaction.account_no}")
    if not f.is_amount_in_range(transaction.amount):
        errors.append(
            f"Invalid amount: must be between {f.MIN_TRANSACTION_AMOUNT} "
            f"and {f.MAX_TRANSACTION_AMOUNT}"
        )
    if not f.is_valid_file_type(transaction.file_type):
        errors.append(f"Invalid file type: {transaction.file_type}")
    if not f.is_valid_status(transaction.status):
        errors.append(f"Invalid status: {transaction.status}")
    if not transaction.file_name or not transaction.file_name.strip():
        errors.append("File name cannot be empty")
    elif not f.is_valid_nach_file_name(transaction.file_name):
        errors.append(f"Invalid NACH file name format: {transaction.file_name}")
    if transaction.batch_no is not None and not f.is_valid_batch_no(transaction.batch_no):
        errors.append(f"Invalid batch number format: {transaction.batch_no}")
    if not f.is_valid_error_code(transaction.error_code):
        errors.append(f"Invalid error code format: {transaction.error_code}")

    return ValidationResult.from_errors(errors)


def validate_parsed_line(fields: list[str] | None, line_number: int) -> ValidationResult:
    """Check the raw split fields of one data line."""
    if fields is None or len(fields) < MIN_FIELDS_COUNT:
        found = len(fields) if fields is not None else 0
        return ValidationResult(
            False,
            [
                f"Line {line_number}: Insufficient fields. "
                f"Expected at least {MIN_FIELDS_COUNT}, found {found}"
            ],
        )

    errors: list[str] = []
    if not f.is_valid_txn_ref_no(fields[0]):
        errors.append(f"Line {line_number}: Invalid transaction reference number")
    if not f.is_valid_mandate_id(fields[1]):
        errors.append(f"Line {line_number}: Invalid mandate ID")
    if not f.is_valid_account_number(fields[2]):
        errors.append(f"Line {line_number}: Invalid account number")
    if not f.is_valid_amount(fields[3]):
        errors.append(f"Line {line_number}: Invalid amount")
    if len(fields) > 4 and fields[4].strip() and not f.is_valid_customer_name(fields[4]):
        errors.append(f"Line {line_number}: Invalid customer name")

    return ValidationResult.from_errors(errors)


def validate_header(header_fields: list[str] | None) -> ValidationResult:
    """Check that a header row has enough columns and names a known field."""
    if header_fields is None or len(header_fields) < MIN_FIELDS_COUNT:
        found = len(header_fields) if header_fields is not None else 0
        return ValidationResult(
            False,
            [f"Invalid header: Expected at least {MIN_FIELDS_COUNT} fields, found {found}"],
        )

    names = [field.strip().upper() for field in header_fields]
    if not any(keyword in name for name in names for keyword in HEADER_KEYWORDS):
        return ValidationResult(
            False,
            ["Header does not contain expected field names (TXN, MANDATE, ACCOUNT, AMOUNT)"],
        )
    return ValidationResult(True)


def validate_file_content(lines: list[str] | None, delimiter: str = "|") -> ValidationResult:
    """Structural check over a whole file: header shape and per-line field counts."""
    if not lines:
        return ValidationResult(False, ["File is empty"])

    errors: list[str] = []
    if not validate_header(lines[0].split(delimiter)).valid:
        errors.append("Invalid NACH file header format")

    for i, line in enumerate(lines[1:], start=2):
        found = len(line.split(delimiter))
        if found < MIN_FIELDS_COUNT:
            errors.append(
                f"Line {i}: Insufficient fields (expected at least {MIN_FIELDS_COUNT}, found {found})"
            )
            if len(errors) >= MAX_REPORTED_LINE_ERRORS:
                errors.append("... and potentially more errors")
                break

    if len(lines) <= 1:
        errors.append("File contains header only, no transaction data found")

    return ValidationResult.from_errors(errors)


def validate_reprocess_request(transaction_ids: list[Any] | None, max_batch_size: int = 1000) -> ValidationResult:
    """Reject empty, oversized or malformed id lists."""
    if not transaction_ids:
        return ValidationResult(False, ["Transaction IDs list cannot be empty"])

    errors: list[str] = []
    if len(transaction_ids) > max_batch_size:
        errors.append(f"Cannot reprocess more than {max_batch_size} transactions at once")
    for txn_id in transaction_ids:
        if isinstance(txn_id, bool) or not isinstance(txn_id, int) or txn_id <= 0:
            errors.append(f"Invalid transaction ID: {txn_id}")

    return ValidationResult.from_errors(errors)
