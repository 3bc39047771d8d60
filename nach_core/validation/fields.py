"""Field-level format checks for NACH transaction values.

Every check is total: malformed input, ``None`` and non-string values
return ``False`` instead of raising.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from nach_core.models.enums import FileType, TransactionStatus

TXN_REF_PATTERN = re.compile(r"^[A-Z0-9]{10,50}$")
MANDATE_ID_PATTERN = re.compile(r"^[A-Z0-9]{15,50}$")
ACCOUNT_NUMBER_PATTERN = re.compile(r"^[0-9]{10,20}$")
AMOUNT_PATTERN = re.compile(r"^[0-9]+(\.[0-9]{1,2})?$")
BATCH_NO_PATTERN = re.compile(r"^[A-Z0-9]{2,20}$")
ERROR_CODE_PATTERN = re.compile(r"^E[0-9]{3}$")
NACH_FILE_PATTERN = re.compile(r"^(ACH-DR-|ACH-CR-)[A-Z0-9-]+\.txt$")
CUSTOMER_NAME_PATTERN = re.compile(r"^[a-zA-Z\s.'-]+$")

MIN_TRANSACTION_AMOUNT = Decimal("1")
MAX_TRANSACTION_AMOUNT = Decimal("1000000")


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    cleaned = _clean(value)
    return cleaned is not None and pattern.fullmatch(cleaned) is not None


def is_valid_txn_ref_no(value: Any) -> bool:
    return _matches(TXN_REF_PATTERN, value)


def is_valid_mandate_id(value: Any) -> bool:
    return _matches(MANDATE_ID_PATTERN, value)


def is_valid_account_number(value: Any) -> bool:
    return _matches(ACCOUNT_NUMBER_PATTERN, value)


def is_valid_batch_no(value: Any) -> bool:
    return _matches(BATCH_NO_PATTERN, value)


def is_valid_error_code(value: Any) -> bool:
    """An absent error code is valid (no error recorded)."""
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    if not value.strip():
        return True
    return ERROR_CODE_PATTERN.fullmatch(value.strip()) is not None


def is_valid_nach_file_name(value: Any) -> bool:
    # No stripping: prefix case and extension are part of the convention
    return isinstance(value, str) and NACH_FILE_PATTERN.fullmatch(value) is not None


def is_amount_in_range(amount: Any) -> bool:
    """Range check on an already-decoded amount."""
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int)):
        return False
    try:
        return MIN_TRANSACTION_AMOUNT <= amount <= MAX_TRANSACTION_AMOUNT
    except InvalidOperation:
        return False


def is_valid_amount(value: Any) -> bool:
    """Check a raw amount string, or a decoded Decimal, against format and range."""
    if isinstance(value, (Decimal, int)) and not isinstance(value, bool):
        return is_amount_in_range(value)
    cleaned = _clean(value)
    if cleaned is None or AMOUNT_PATTERN.fullmatch(cleaned) is None:
        return False
    try:
        return is_amount_in_range(Decimal(cleaned))
    except InvalidOperation:
        return False


def is_valid_file_type(value: Any) -> bool:
    cleaned = _clean(value)
    return cleaned is not None and cleaned.upper() in {t.value for t in FileType}


def is_valid_status(value: Any) -> bool:
    cleaned = _clean(value)
    return cleaned is not None and cleaned.upper() in {s.value for s in TransactionStatus}


def is_valid_customer_name(value: Any) -> bool:
    cleaned = _clean(value)
    if cleaned is None or not 2 <= len(cleaned) <= 100:
        return False
    return CUSTOMER_NAME_PATTERN.fullmatch(cleaned) is not None
