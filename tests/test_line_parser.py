"""Tests for single-line decoding."""

from decimal import Decimal

import pytest

from nach_core.config import ParserConfig
from nach_core.exceptions import LineParseError
from nach_core.models import AcceptanceRule, FileContext, FileType, TransactionStatus
from nach_core.parsing import LineFields, LineParser

VALID_LINE = "REF000000000001|MNDTABCD123456789012|1234567890|1500.50|Asha Rao|HDFC0001234|ICIC0005678|03062024|LOAN"


class TestLineFields:
    """Tests for LineFields.decode."""

    def test_all_fields(self) -> None:
        decoded = LineFields.decode(VALID_LINE)

        assert decoded.txn_ref_no == "REF000000000001"
        assert decoded.amount == Decimal("1500.50")
        assert decoded.customer_name == "Asha Rao"
        assert decoded.purpose_code == "LOAN"

    def test_required_fields_only(self) -> None:
        decoded = LineFields.decode("REF000000000001|MNDT|1234567890|10")

        assert decoded.customer_name is None
        assert decoded.sponsor_bank is None
        assert decoded.purpose_code is None

    def test_fields_trimmed_and_blank_is_none(self) -> None:
        decoded = LineFields.decode(" REF000000000001 | | 1234567890 | 10.00 ")

        assert decoded.txn_ref_no == "REF000000000001"
        assert decoded.mandate_id is None
        assert decoded.account_no == "1234567890"

    def test_custom_delimiter(self) -> None:
        decoded = LineFields.decode("REF1;MNDT;1234567890;5", delimiter=";")
        assert decoded.amount == Decimal("5")

    @pytest.mark.parametrize(
        "line",
        [
            "REF000000000001|MNDT|1234567890",
            "|MNDT|1234567890|10.00",
            "REF000000000001|MNDT|1234567890|abc",
            "REF000000000001|MNDT|1234567890|",
            "REF000000000001|MNDT|1234567890|NaN",
            "REF000000000001|MNDT|1234567890|Infinity",
        ],
    )
    def test_structural_errors(self, line: str) -> None:
        with pytest.raises(LineParseError):
            LineFields.decode(line)


class TestLineParser:
    """Tests for LineParser.parse."""

    def test_valid_line_is_success(self, sample_context: FileContext) -> None:
        txn = LineParser().parse(VALID_LINE, sample_context)

        assert txn.status == TransactionStatus.SUCCESS
        assert txn.error_code is None
        assert txn.file_name == sample_context.file_name
        assert txn.file_type == FileType.DR
        assert txn.batch_no == "TPZ000433633"
        assert txn.processed_date is not None
        assert txn.id is None

    def test_non_positive_amount_is_error(self, sample_context: FileContext) -> None:
        txn = LineParser().parse("REF000000000002|MNDTABCD123456789012|1234567890|-50.00", sample_context)

        assert txn.status == TransactionStatus.ERROR
        assert txn.error_code == "E001"
        assert txn.error_desc == "Validation failed"
        assert txn.amount == Decimal("-50.00")

    def test_short_account_is_error(self, sample_context: FileContext) -> None:
        txn = LineParser().parse("REF000000000003|MNDTABCD123456789012|123456789|10", sample_context)
        assert txn.status == TransactionStatus.ERROR

    def test_missing_mandate_is_error(self, sample_context: FileContext) -> None:
        txn = LineParser().parse("REF000000000004||1234567890|10", sample_context)
        assert txn.status == TransactionStatus.ERROR

    def test_minimal_rule_ignores_formats(self, sample_context: FileContext) -> None:
        """Lower-case reference and short mandate still pass the minimal rule."""
        txn = LineParser().parse("ref-1|m1|ACCT-00000001|0.01", sample_context)
        assert txn.status == TransactionStatus.SUCCESS

    def test_malformed_line_is_parse_error(self, sample_context: FileContext) -> None:
        txn = LineParser().parse("REF000000000005|MNDT", sample_context)

        assert txn.status == TransactionStatus.PARSE_ERROR
        assert txn.txn_ref_no.startswith("ERR_")
        assert len(txn.txn_ref_no) == 12
        assert txn.error_desc.startswith("Line parsing failed: ")
        assert txn.amount is None
        assert txn.file_name == sample_context.file_name

    def test_parse_error_references_are_unique(self, sample_context: FileContext) -> None:
        parser = LineParser()
        refs = {parser.parse("bad", sample_context).txn_ref_no for _ in range(50)}
        assert len(refs) == 50


class TestStrictRule:
    """LineParser with the STRICT acceptance rule."""

    @pytest.fixture
    def parser(self) -> LineParser:
        return LineParser(ParserConfig(acceptance_rule=AcceptanceRule.STRICT))

    def test_valid_line(self, parser: LineParser, sample_context: FileContext) -> None:
        assert parser.parse(VALID_LINE, sample_context).status == TransactionStatus.SUCCESS

    def test_bad_mandate_reports_e003(self, parser: LineParser, sample_context: FileContext) -> None:
        txn = parser.parse("REF000000000001|M1|1234567890|100", sample_context)

        assert txn.status == TransactionStatus.ERROR
        assert txn.error_code == "E003"

    def test_amount_out_of_range_reports_e005(self, parser: LineParser, sample_context: FileContext) -> None:
        txn = parser.parse("REF000000000001|MNDTABCD123456789012|1234567890|2000000", sample_context)
        assert txn.error_code == "E005"

    def test_bad_reference_reports_e009(self, parser: LineParser, sample_context: FileContext) -> None:
        txn = parser.parse("ref1|MNDTABCD123456789012|1234567890|100", sample_context)
        assert txn.error_code == "E009"
