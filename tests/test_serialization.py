"""Tests for JSON-friendly serialization."""

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from nach_core.models import (
    DashboardStats,
    FileContext,
    IngestionResult,
    ParsedFile,
    ReprocessAuditEntry,
    ReprocessResult,
    TransactionStatus,
)
from nach_core.serialization import dataclass_to_dict, serialize_value, to_dict


@dataclass
class _SampleData:
    name: str
    amount: Decimal
    created_at: datetime


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        obj = _SampleData(name="test", amount=Decimal("100.50"), created_at=datetime(2024, 1, 1))

        result = to_dict(obj)

        assert result == {"name": "test", "amount": "100.50", "created_at": "2024-01-01T00:00:00"}

    def test_dict_passthrough(self) -> None:
        d = {"key": "value"}
        assert to_dict(d) == d

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_transaction(self, make_transaction) -> None:
        result = to_dict(make_transaction(status=TransactionStatus.ERROR, error_code="E001"))

        assert result["status"] == "ERROR"
        assert result["file_type"] == "DR"
        assert result["amount"] == "100.00"
        assert result["processed_date"] == "2024-06-03T10:00:00"
        json.dumps(result)

    def test_dashboard_stats_include_rates(self) -> None:
        stats = DashboardStats(success=2, error=1, success_amount=Decimal("20"), error_amount=Decimal("5.5"))

        result = to_dict(stats)

        assert result["total"] == 3
        assert result["total_amount"] == "25.5"
        assert result["success_rate"] == 66.67
        assert result["error_rate"] == 33.33

    def test_parsed_file(self, make_transaction, sample_context: FileContext) -> None:
        parsed = ParsedFile(
            context=sample_context,
            transactions=[make_transaction(), make_transaction(status=TransactionStatus.PARSE_ERROR)],
        )

        result = to_dict(parsed)

        assert result["file_name"] == sample_context.file_name
        assert result["batch_no"] == "TPZ000433633"
        assert result["valid_count"] == 1
        assert result["parse_error_count"] == 1
        assert len(result["transactions"]) == 2

    def test_reprocess_result_nests_audit(self) -> None:
        result = ReprocessResult(actor="ops", reason="retry", success_count=1, total_count=1)
        result.audit.append(
            ReprocessAuditEntry(
                transaction_id=1,
                txn_ref_no="REF000000000001",
                previous_status=TransactionStatus.STUCK,
                new_status=TransactionStatus.REPROCESSED,
                actor="ops",
                reason="retry",
                timestamp=datetime(2024, 6, 3, 12, 0),
            )
        )

        data = to_dict(result)

        assert data["audit"][0]["previous_status"] == "STUCK"
        assert data["audit"][0]["timestamp"] == "2024-06-03T12:00:00"
        json.dumps(data)

    def test_ingestion_result(self) -> None:
        result = IngestionResult(
            file_name="ACH-CR-X.txt",
            file_type="CR",
            batch_no="HV000004",
            transaction_count=3,
            valid_count=2,
            parse_error_count=1,
            inserted_count=2,
            failed_count=0,
        )

        assert dataclass_to_dict(result)["truncated"] is False


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"

    def test_enum(self) -> None:
        assert serialize_value(TransactionStatus.REPROCESSED) == "REPROCESSED"

    def test_date_and_datetime(self) -> None:
        assert serialize_value(date(2024, 6, 3)) == "2024-06-03"
        assert serialize_value(datetime(2024, 6, 15, 10, 30)) == "2024-06-15T10:30:00"

    def test_nested_collections(self) -> None:
        value = {"ids": [1, 2], "amounts": [Decimal("1.50")], "when": {"at": date(2024, 1, 2)}}

        assert serialize_value(value) == {"ids": [1, 2], "amounts": ["1.50"], "when": {"at": "2024-01-02"}}

    def test_passthrough(self) -> None:
        assert serialize_value("plain") == "plain"
        assert serialize_value(None) is None
