"""Batch file and line parsing."""

from nach_core.parsing.file_parser import FileParser
from nach_core.parsing.filename import extract_batch_number, extract_file_type
from nach_core.parsing.line_parser import LineFields, LineParser

__all__ = [
    "FileParser",
    "LineFields",
    "LineParser",
    "extract_batch_number",
    "extract_file_type",
]
