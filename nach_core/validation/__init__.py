"""Field and record validation."""

from nach_core.validation.rules import (
    validate_file_content,
    validate_header,
    validate_parsed_line,
    validate_reprocess_request,
    validate_transaction,
    validate_upload,
)

__all__ = [
    "validate_file_content",
    "validate_header",
    "validate_parsed_line",
    "validate_reprocess_request",
    "validate_transaction",
    "validate_upload",
]
