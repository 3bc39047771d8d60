"""Transaction lifecycle: acceptance, status predicates and transitions.

Initial statuses (SUCCESS, ERROR, PARSE_ERROR) are assigned at parse time.
STUCK and FAILED only arrive from outside the core. REPROCESSED is reached
from ERROR, STUCK or FAILED through the reprocessor and is terminal.
"""

from decimal import Decimal

from nach_core.exceptions import InvalidStatusTransitionError
from nach_core.models.enums import AcceptanceRule, ErrorCode, TransactionStatus
from nach_core.models.transaction import Transaction
from nach_core.validation import fields as f

VALIDATION_FAILED_CODE = "E001"
VALIDATION_FAILED_DESC = "Validation failed"
MIN_ACCOUNT_LENGTH = 10

REPROCESSABLE_STATUSES = frozenset(
    {TransactionStatus.ERROR, TransactionStatus.STUCK, TransactionStatus.FAILED}
)
TERMINAL_STATUSES = frozenset({TransactionStatus.SUCCESS, TransactionStatus.REPROCESSED})

ALLOWED_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    status: frozenset({TransactionStatus.REPROCESSED}) for status in REPROCESSABLE_STATUSES
}


def _as_status(status: TransactionStatus | str | None) -> TransactionStatus | None:
    if isinstance(status, TransactionStatus):
        return status
    if not isinstance(status, str):
        return None
    try:
        return TransactionStatus(status.strip().upper())
    except ValueError:
        return None


def is_reprocessable(status: TransactionStatus | str | None) -> bool:
    return _as_status(status) in REPROCESSABLE_STATUSES


def is_terminal(status: TransactionStatus | str | None) -> bool:
    return _as_status(status) in TERMINAL_STATUSES


def passes_minimal_rule(
    amount: Decimal | None,
    account_no: str | None,
    mandate_id: str | None = None,
    require_mandate: bool = True,
) -> bool:
    """Positive amount, account of at least ten characters and, at ingestion, a mandate."""
    if amount is None or amount <= 0:
        return False
    if not account_no or len(account_no) < MIN_ACCOUNT_LENGTH:
        return False
    if require_mandate and not mandate_id:
        return False
    return True


def _strict_rejection(transaction: Transaction) -> tuple[str, str] | None:
    if not f.is_valid_txn_ref_no(transaction.txn_ref_no):
        return ErrorCode.VALIDATION_FAILED.value, f"Invalid transaction reference number: {transaction.txn_ref_no}"
    if not f.is_valid_mandate_id(transaction.mandate_id):
        return ErrorCode.INVALID_MANDATE.value, f"Invalid mandate ID: {transaction.mandate_id}"
    if not f.is_valid_account_number(transaction.account_no):
        return ErrorCode.VALIDATION_FAILED.value, f"Invalid account number: {transaction.account_no}"
    if not f.is_amount_in_range(transaction.amount):
        return (
            ErrorCode.INVALID_AMOUNT.value,
            f"Invalid amount: must be between {f.MIN_TRANSACTION_AMOUNT} and {f.MAX_TRANSACTION_AMOUNT}",
        )
    return None


def check_acceptance(
    transaction: Transaction,
    rule: AcceptanceRule = AcceptanceRule.MINIMAL,
    require_mandate: bool = True,
) -> tuple[str, str] | None:
    """Return ``(error_code, error_desc)`` when the rule rejects, ``None`` when accepted.

    Parameters
    ----------
    transaction : Transaction
        Decoded record to check.
    rule : AcceptanceRule
        MINIMAL checks amount, account length and mandate presence;
        STRICT runs every field format rule and reports the first failure.
    require_mandate : bool
        Reprocessing re-runs the MINIMAL rule without the mandate check.
    """
    if rule == AcceptanceRule.STRICT:
        return _strict_rejection(transaction)
    if passes_minimal_rule(
        transaction.amount,
        transaction.account_no,
        transaction.mandate_id,
        require_mandate=require_mandate,
    ):
        return None
    return VALIDATION_FAILED_CODE, VALIDATION_FAILED_DESC


def assign_initial_status(
    transaction: Transaction,
    rule: AcceptanceRule = AcceptanceRule.MINIMAL,
) -> Transaction:
    """Set SUCCESS, or ERROR with code and description, on a freshly parsed record."""
    rejection = check_acceptance(transaction, rule)
    if rejection is None:
        transaction.status = TransactionStatus.SUCCESS
        transaction.error_code = None
        transaction.error_desc = None
    else:
        transaction.status = TransactionStatus.ERROR
        transaction.error_code, transaction.error_desc = rejection
    return transaction


def can_transition(current: TransactionStatus | str, target: TransactionStatus | str) -> bool:
    source = _as_status(current)
    dest = _as_status(target)
    if source is None or dest is None:
        return False
    return dest in ALLOWED_TRANSITIONS.get(source, frozenset())


def transition(transaction: Transaction, target: TransactionStatus) -> Transaction:
    """Move a record to ``target``; raises InvalidStatusTransitionError when not allowed."""
    if not can_transition(transaction.status, target):
        raise InvalidStatusTransitionError(
            f"Transaction {transaction.txn_ref_no}: cannot move from "
            f"{_as_status(transaction.status) or transaction.status} to {target}"
        )
    transaction.status = TransactionStatus(target)
    if transaction.status == TransactionStatus.REPROCESSED:
        transaction.error_code = None
        transaction.error_desc = None
    transaction.touch()
    return transaction
