"""PostgreSQL-backed transaction store."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

import psycopg
from psycopg.rows import dict_row

from nach_core.exceptions import StoreError
from nach_core.models.enums import FileType, TransactionStatus
from nach_core.models.transaction import Transaction

logger = logging.getLogger(__name__)

TABLE = "nach_transactions"

COLUMNS = [
    "txn_ref_no",
    "mandate_id",
    "account_no",
    "amount",
    "status",
    "error_code",
    "error_desc",
    "file_name",
    "file_type",
    "batch_no",
    "customer_name",
    "sponsor_bank",
    "destination_bank",
    "transaction_date",
    "purpose_code",
    "processed_date",
    "created_at",
    "updated_at",
]

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    id BIGSERIAL PRIMARY KEY,
    txn_ref_no VARCHAR(50) NOT NULL UNIQUE,
    mandate_id VARCHAR(50),
    account_no VARCHAR(20),
    amount NUMERIC(12, 2),
    status VARCHAR(20) NOT NULL,
    error_code VARCHAR(4),
    error_desc TEXT,
    file_name VARCHAR(255) NOT NULL,
    file_type VARCHAR(2) NOT NULL,
    batch_no VARCHAR(32) NOT NULL,
    customer_name VARCHAR(100),
    sponsor_bank VARCHAR(50),
    destination_bank VARCHAR(50),
    transaction_date VARCHAR(20),
    purpose_code VARCHAR(20),
    processed_date TIMESTAMP,
    created_at TIMESTAMP NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMP NOT NULL DEFAULT NOW()
)
"""

SELECT_SQL = f"SELECT id, {', '.join(COLUMNS)} FROM {TABLE}"  # noqa: S608


def row_to_transaction(row: dict[str, Any]) -> Transaction:
    """Decode a result row; optional columns missing from the row stay unset."""
    amount = row.get("amount")
    transaction = Transaction(
        id=row["id"],
        txn_ref_no=row["txn_ref_no"],
        mandate_id=row.get("mandate_id"),
        account_no=row.get("account_no"),
        amount=Decimal(str(amount)) if amount is not None else None,
        status=TransactionStatus(row["status"]),
        file_name=row["file_name"],
        file_type=FileType(row["file_type"]),
        batch_no=row["batch_no"],
        error_code=row.get("error_code"),
        error_desc=row.get("error_desc"),
        customer_name=row.get("customer_name"),
        sponsor_bank=row.get("sponsor_bank"),
        destination_bank=row.get("destination_bank"),
        transaction_date=row.get("transaction_date"),
        purpose_code=row.get("purpose_code"),
        processed_date=row.get("processed_date"),
    )
    # Timestamp columns are absent from some legacy projections
    if row.get("created_at") is not None:
        transaction.created_at = row["created_at"]
    if row.get("updated_at") is not None:
        transaction.updated_at = row["updated_at"]
    return transaction


def _transaction_params(transaction: Transaction) -> tuple:
    values = []
    for column in COLUMNS:
        value = getattr(transaction, column)
        if isinstance(value, (TransactionStatus, FileType)):
            value = value.value
        values.append(value)
    return tuple(values)


class PostgresTransactionStore:
    """Transaction store over a single psycopg connection."""

    def __init__(self, connection_string: str) -> None:
        """Open the connection.

        Parameters
        ----------
        connection_string : str
            libpq connection string (see ``PostgresConfig.connection_string``).
        """
        try:
            self.conn = psycopg.connect(connection_string, row_factory=dict_row)
        except psycopg.Error as e:
            raise StoreError(f"Could not connect to PostgreSQL: {e}") from e

    def create_schema(self) -> None:
        with self.conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def _fetch(self, where: str = "", params: tuple | list = ()) -> list[Transaction]:
        sql = f"{SELECT_SQL} {where} ORDER BY id"
        with self.conn.cursor() as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
        return [row_to_transaction(row) for row in rows]

    def get_all(self) -> list[Transaction]:
        return self._fetch()

    def get_by_ids(self, ids: Iterable[int]) -> list[Transaction]:
        id_list = list(dict.fromkeys(ids))
        if not id_list:
            return []
        return self._fetch("WHERE id = ANY(%s)", (id_list,))

    def get_by_status(self, status: TransactionStatus) -> list[Transaction]:
        return self._fetch("WHERE status = %s", (TransactionStatus(status).value,))

    def get_by_date_range(self, start: datetime, end: datetime) -> list[Transaction]:
        return self._fetch("WHERE processed_date BETWEEN %s AND %s", (start, end))

    def get_by_reference(self, txn_ref_no: str) -> list[Transaction]:
        return self._fetch("WHERE txn_ref_no = %s", (txn_ref_no,))

    def search(self, term: str) -> list[Transaction]:
        needle = term.strip()
        if not needle:
            return []
        pattern = f"%{needle}%"
        return self._fetch(
            "WHERE txn_ref_no ILIKE %s OR mandate_id ILIKE %s OR account_no ILIKE %s",
            (pattern, pattern, pattern),
        )

    def insert(self, transaction: Transaction) -> bool:
        """Insert one row; False when the reference already exists or the write fails."""
        placeholders = ", ".join(["%s"] * len(COLUMNS))
        sql = (
            f"INSERT INTO {TABLE} ({', '.join(COLUMNS)}) VALUES ({placeholders}) "  # noqa: S608
            "ON CONFLICT (txn_ref_no) DO NOTHING RETURNING id"
        )
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, _transaction_params(transaction))
                row = cur.fetchone()
            self.conn.commit()
        except psycopg.Error as e:
            self.conn.rollback()
            logger.error("Insert failed for %s: %s", transaction.txn_ref_no, e)
            return False

        if row is None:
            logger.warning("Duplicate transaction reference %s rejected", transaction.txn_ref_no)
            return False
        transaction.id = row["id"]
        return True

    def update_status(
        self,
        transaction_id: int,
        status: TransactionStatus,
        error_code: str | None = None,
        error_desc: str | None = None,
    ) -> bool:
        sql = (
            f"UPDATE {TABLE} SET status = %s, error_code = %s, error_desc = %s, "  # noqa: S608
            "updated_at = NOW() WHERE id = %s"
        )
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, (TransactionStatus(status).value, error_code, error_desc, transaction_id))
                updated = cur.rowcount
            self.conn.commit()
        except psycopg.Error as e:
            self.conn.rollback()
            logger.error("Status update failed for transaction %s: %s", transaction_id, e)
            return False
        return updated == 1
