"""Tests for field-level format checks."""

from decimal import Decimal

import pytest

from nach_core.validation import fields


class TestReferenceAndMandate:
    """Reference, mandate, account and batch patterns."""

    @pytest.mark.parametrize("value", ["REF000000000001", "ABCDEFGHIJ", " REF1234567890 "])
    def test_valid_reference(self, value: str) -> None:
        assert fields.is_valid_txn_ref_no(value)

    @pytest.mark.parametrize("value", [None, "", "   ", "SHORT", "ref000000000001", "REF-0000000001", 12345678901])
    def test_invalid_reference(self, value) -> None:
        assert not fields.is_valid_txn_ref_no(value)

    def test_mandate_length(self) -> None:
        assert fields.is_valid_mandate_id("MNDTABCD123456789012")
        assert not fields.is_valid_mandate_id("MNDT12345")
        assert not fields.is_valid_mandate_id(None)

    def test_account_number(self) -> None:
        assert fields.is_valid_account_number("1234567890")
        assert fields.is_valid_account_number("12345678901234567890")
        assert not fields.is_valid_account_number("123456789")
        assert not fields.is_valid_account_number("123456789012345678901")
        assert not fields.is_valid_account_number("12345ABCDE")

    def test_batch_number(self) -> None:
        assert fields.is_valid_batch_no("TPZ000433633")
        assert fields.is_valid_batch_no("HV")
        assert not fields.is_valid_batch_no("H")
        assert not fields.is_valid_batch_no("tpz000433633")


class TestErrorCode:
    """Absent codes are valid, present ones must match E###."""

    @pytest.mark.parametrize("value", [None, "", "  ", "E001", "E999"])
    def test_valid(self, value) -> None:
        assert fields.is_valid_error_code(value)

    @pytest.mark.parametrize("value", ["E1", "X001", "e001", "E0001", 1])
    def test_invalid(self, value) -> None:
        assert not fields.is_valid_error_code(value)


class TestNachFileName:
    """File naming convention."""

    def test_valid_names(self) -> None:
        assert fields.is_valid_nach_file_name("ACH-DR-BDBL-03062024-TPZ000433633-P3FC-INW.txt")
        assert fields.is_valid_nach_file_name("ACH-CR-BDBL-HV000004.txt")

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "ach-dr-bdbl.txt",
            "ACH-DR-BDBL.TXT",
            "ACH-DR-BDBL.csv",
            "ACH-XX-BDBL.txt",
            " ACH-DR-BDBL.txt",
            "ACH-DR-bdbl.txt",
        ],
    )
    def test_invalid_names(self, value) -> None:
        assert not fields.is_valid_nach_file_name(value)


class TestAmount:
    """Amount format and range."""

    @pytest.mark.parametrize("value", ["1", "1.00", "1000000", "1000000.00", "250.5"])
    def test_valid_strings(self, value: str) -> None:
        assert fields.is_valid_amount(value)

    @pytest.mark.parametrize("value", ["0.99", "1000000.01", "-5", "1.234", "abc", "", None, "1e3"])
    def test_invalid_strings(self, value) -> None:
        assert not fields.is_valid_amount(value)

    def test_decimal_values(self) -> None:
        assert fields.is_valid_amount(Decimal("500.25"))
        assert not fields.is_valid_amount(Decimal("0"))

    def test_range_bounds_inclusive(self) -> None:
        assert fields.is_amount_in_range(fields.MIN_TRANSACTION_AMOUNT)
        assert fields.is_amount_in_range(fields.MAX_TRANSACTION_AMOUNT)
        assert fields.is_amount_in_range(5)

    def test_range_rejects_non_numbers(self) -> None:
        assert not fields.is_amount_in_range(None)
        assert not fields.is_amount_in_range(True)
        assert not fields.is_amount_in_range("100")
        assert not fields.is_amount_in_range(Decimal("NaN"))


class TestEnumsAndNames:
    """File type, status and customer name."""

    def test_file_type(self) -> None:
        assert fields.is_valid_file_type("DR")
        assert fields.is_valid_file_type("cr")
        assert not fields.is_valid_file_type("XX")
        assert not fields.is_valid_file_type(None)

    def test_status(self) -> None:
        assert fields.is_valid_status("REPROCESSED")
        assert fields.is_valid_status("parse_error")
        assert not fields.is_valid_status("PENDING")

    def test_customer_name(self) -> None:
        assert fields.is_valid_customer_name("Asha O'Neil-Rao Jr.")
        assert not fields.is_valid_customer_name("A")
        assert not fields.is_valid_customer_name("Name 42")
        assert not fields.is_valid_customer_name("x" * 101)
