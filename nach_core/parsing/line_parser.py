"""Decode one pipe-delimited data line into a Transaction."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from nach_core.config import ParserConfig
from nach_core.exceptions import LineParseError
from nach_core.models.enums import TransactionStatus
from nach_core.models.results import FileContext
from nach_core.models.transaction import Transaction
from nach_core.status import assign_initial_status
from nach_core.validation.rules import MIN_FIELDS_COUNT

logger = logging.getLogger(__name__)

PARSE_ERROR_PREFIX = "ERR_"


def _optional(fields: list[str], index: int) -> str | None:
    if index >= len(fields):
        return None
    value = fields[index].strip()
    return value or None


@dataclass(frozen=True)
class LineFields:
    """Named view over the positional columns of a data line.

    Columns 0-3 (reference, mandate, account, amount) are required; columns
    4-8 (customer name, sponsor bank, destination bank, transaction date,
    purpose code) are optional and default to ``None``.
    """

    txn_ref_no: str
    mandate_id: str | None
    account_no: str | None
    amount: Decimal
    customer_name: str | None = None
    sponsor_bank: str | None = None
    destination_bank: str | None = None
    transaction_date: str | None = None
    purpose_code: str | None = None

    @classmethod
    def decode(cls, line: str, delimiter: str = "|") -> "LineFields":
        fields = line.split(delimiter)
        if len(fields) < MIN_FIELDS_COUNT:
            raise LineParseError(
                f"Invalid line format: expected at least {MIN_FIELDS_COUNT} fields, found {len(fields)}"
            )

        txn_ref_no = fields[0].strip()
        if not txn_ref_no:
            raise LineParseError("Missing transaction reference number")

        raw_amount = fields[3].strip()
        try:
            amount = Decimal(raw_amount)
        except InvalidOperation as e:
            raise LineParseError(f"Invalid amount: {raw_amount!r}") from e
        if not amount.is_finite():
            raise LineParseError(f"Invalid amount: {raw_amount!r}")

        return cls(
            txn_ref_no=txn_ref_no,
            mandate_id=_optional(fields, 1),
            account_no=_optional(fields, 2),
            amount=amount,
            customer_name=_optional(fields, 4),
            sponsor_bank=_optional(fields, 5),
            destination_bank=_optional(fields, 6),
            transaction_date=_optional(fields, 7),
            purpose_code=_optional(fields, 8),
        )


class LineParser:
    """Turn data lines into transactions, falling back to PARSE_ERROR placeholders."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def parse(self, line: str, context: FileContext) -> Transaction:
        """Parse one line; never raises for malformed content.

        Parameters
        ----------
        line : str
            Raw data line (header already removed).
        context : FileContext
            File name, file type and batch number shared by the file.

        Returns
        -------
        Transaction
            A SUCCESS/ERROR record, or a PARSE_ERROR placeholder when the
            line cannot be decoded.
        """
        try:
            decoded = LineFields.decode(line, self.config.delimiter)
        except LineParseError as e:
            logger.debug("Line parse failed in %s: %s", context.file_name, e)
            return self.parse_error(context, str(e))

        transaction = Transaction(
            txn_ref_no=decoded.txn_ref_no,
            mandate_id=decoded.mandate_id,
            account_no=decoded.account_no,
            amount=decoded.amount,
            status=TransactionStatus.SUCCESS,
            file_name=context.file_name,
            file_type=context.file_type,
            batch_no=context.batch_no,
            customer_name=decoded.customer_name,
            sponsor_bank=decoded.sponsor_bank,
            destination_bank=decoded.destination_bank,
            transaction_date=decoded.transaction_date,
            purpose_code=decoded.purpose_code,
            processed_date=datetime.now(),
        )
        return assign_initial_status(transaction, self.config.acceptance_rule)

    def parse_error(self, context: FileContext, reason: str) -> Transaction:
        """Placeholder that keeps line order for diagnostics."""
        return Transaction(
            txn_ref_no=f"{PARSE_ERROR_PREFIX}{uuid.uuid4().hex[:8].upper()}",
            mandate_id=None,
            account_no=None,
            amount=None,
            status=TransactionStatus.PARSE_ERROR,
            file_name=context.file_name,
            file_type=context.file_type,
            batch_no=context.batch_no,
            error_desc=f"Line parsing failed: {reason}",
            processed_date=datetime.now(),
        )
