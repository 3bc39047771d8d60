"""Parse a whole NACH batch file: header, metadata and every data line."""

from typing import Iterable

from nach_core.config import ParserConfig
from nach_core.logging import get_logger
from nach_core.models.results import FileContext, ParsedFile
from nach_core.parsing.filename import extract_batch_number, extract_file_type
from nach_core.parsing.line_parser import LineParser
from nach_core.validation.rules import validate_header


class FileParser:
    """Drive the line parser over a file, preserving line order."""

    def __init__(
        self,
        config: ParserConfig | None = None,
        line_parser: LineParser | None = None,
    ) -> None:
        """Initialize file parser.

        Parameters
        ----------
        config : ParserConfig | None
            Delimiter, line cap, encoding and acceptance rule.
        line_parser : LineParser | None
            Line parser to use; built from ``config`` when omitted.
        """
        self.config = config or ParserConfig()
        self.line_parser = line_parser or LineParser(self.config)

    def context_for(self, file_name: str) -> FileContext:
        return FileContext(
            file_name=file_name,
            file_type=extract_file_type(file_name),
            batch_no=extract_batch_number(file_name),
        )

    def parse(self, content: bytes, file_name: str) -> ParsedFile:
        """Decode ``content`` and parse every data line after the header."""
        text = content.decode(self.config.encoding, errors="replace").lstrip("\ufeff")
        return self.parse_lines(text.splitlines(), file_name)

    def parse_lines(self, lines: Iterable[str], file_name: str) -> ParsedFile:
        """Parse already-decoded lines; the first line is the header."""
        context = self.context_for(file_name)
        result = ParsedFile(context=context)
        log = get_logger(__name__, file_name=file_name, batch_no=context.batch_no)

        iterator = iter(lines)
        header = next(iterator, None)
        if header is None:
            log.warning("File %s is empty", file_name)
            return result

        header_check = validate_header(header.split(self.config.delimiter))
        if not header_check.valid:
            log.warning("File %s: %s", file_name, header_check.error_message)

        count = 0
        for line in iterator:
            if not line.strip():
                continue
            if count >= self.config.max_lines:
                result.truncated = True
                log.warning(
                    "File %s exceeds %d data lines; remaining lines were not parsed",
                    file_name,
                    self.config.max_lines,
                )
                break
            count += 1
            result.transactions.append(self.line_parser.parse(line, context))

        log.info(
            "Parsed %s: %d lines, %d valid, %d parse errors (type=%s)",
            file_name,
            result.total_count,
            result.valid_count,
            result.parse_error_count,
            context.file_type.value,
        )
        return result
