"""Sample NACH batch file generator for demos and tests."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from nach_core.generators.base import BaseGenerator
from nach_core.models.enums import FileType

HEADER = "TXN_REF_NO|MANDATE_ID|ACCOUNT_NO|AMOUNT|CUSTOMER_NAME|SPONSOR_BANK|DESTINATION_BANK|TXN_DATE|PURPOSE_CODE"

PURPOSE_CODES = ["LOAN", "INSU", "UTIL", "MUTF", "TAXS", "SIPI"]


@dataclass
class SampleFile:
    """A rendered batch file."""

    file_name: str
    content: bytes
    valid_lines: int
    error_lines: int
    malformed_lines: int

    @property
    def data_lines(self) -> int:
        return self.valid_lines + self.error_lines + self.malformed_lines


class BatchFileGenerator(BaseGenerator):
    """Render pipe-delimited batch files with a controllable mix of bad lines."""

    def file_name(
        self,
        file_type: FileType = FileType.DR,
        batch_no: str | None = None,
        file_date: date | None = None,
    ) -> str:
        """Build a name following ``ACH-<DR|CR>-BDBL-<ddmmyyyy>-<batch>-P3FC-INW.txt``."""
        batch = batch_no or self.batch_number()
        stamp = (file_date or self.fake.date_object()).strftime("%d%m%Y")
        return f"ACH-{FileType(file_type).value}-BDBL-{stamp}-{batch}-P3FC-INW.txt"

    def batch_number(self) -> str:
        return self.fake.bothify("???#########", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ")

    def valid_line(self) -> str:
        """A line that passes every field rule."""
        amount = Decimal(self.random.randint(100, 10_000_000)) / 100
        account_len = self.random.randint(10, 16)
        fields = [
            self.fake.unique.bothify("REF############"),
            self.fake.bothify("MNDT" + "?" * 4 + "#" * 12, letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
            str(self.random.randint(1, 9)) + self.fake.numerify("#" * (account_len - 1)),
            f"{amount:.2f}",
            self.fake.first_name() + " " + self.fake.last_name(),
            self.fake.bothify("????0######", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
            self.fake.bothify("????0######", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
            self.fake.date_object().strftime("%d%m%Y"),
            self.random.choice(PURPOSE_CODES),
        ]
        return "|".join(fields)

    def error_line(self) -> str:
        """A well-formed line that fails acceptance (short account, non-positive amount)."""
        fields = [
            self.fake.unique.bothify("BAD############"),
            self.fake.bothify("M#"),
            self.fake.numerify("###"),
            f"-{self.random.randint(1, 500)}.00",
        ]
        return "|".join(fields)

    def malformed_line(self) -> str:
        """A line with too few fields to decode."""
        return "|".join([self.fake.bothify("REF########"), self.fake.bothify("M###")])

    def generate(
        self,
        num_lines: int = 10,
        error_rate: float = 0.0,
        malformed_rate: float = 0.0,
        file_type: FileType = FileType.DR,
        batch_no: str | None = None,
    ) -> SampleFile:
        """Render a header plus ``num_lines`` data lines.

        Parameters
        ----------
        num_lines : int
            Number of data lines after the header.
        error_rate : float
            Share of lines that decode but fail acceptance.
        malformed_rate : float
            Share of lines that cannot be decoded at all.
        file_type : FileType
            Debit or credit file.
        batch_no : str | None
            Batch token embedded in the name; random when omitted.
        """
        lines = [HEADER]
        counts = {"valid": 0, "error": 0, "malformed": 0}
        for _ in range(num_lines):
            roll = self.random.random()
            if roll < malformed_rate:
                lines.append(self.malformed_line())
                counts["malformed"] += 1
            elif roll < malformed_rate + error_rate:
                lines.append(self.error_line())
                counts["error"] += 1
            else:
                lines.append(self.valid_line())
                counts["valid"] += 1

        return SampleFile(
            file_name=self.file_name(file_type, batch_no),
            content=("\n".join(lines) + "\n").encode("utf-8"),
            valid_lines=counts["valid"],
            error_lines=counts["error"],
            malformed_lines=counts["malformed"],
        )
