"""Custom exception hierarchy for nach-core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nach_core.models.results import ValidationResult


class NachError(Exception):
    """Base exception for all nach-core errors."""


class ConfigurationError(NachError):
    """Raised when configuration is invalid or missing."""


class ValidationError(NachError):
    """Raised when an input is rejected before any record is touched."""

    def __init__(self, message: str, result: ValidationResult | None = None) -> None:
        super().__init__(message)
        self.result = result

    @property
    def errors(self) -> list[str]:
        """Validation messages behind the rejection."""
        return list(self.result.errors) if self.result is not None else []


class InvalidUploadError(ValidationError):
    """Raised when an uploaded file fails name, extension or size checks."""


class InvalidReprocessRequestError(ValidationError):
    """Raised when a reprocess request is empty, oversized or has bad ids."""


class LineParseError(NachError):
    """Raised when a data line cannot be decoded into a transaction."""


class InvalidStatusTransitionError(NachError):
    """Raised when a status change is not allowed by the lifecycle."""


class StoreError(NachError):
    """Raised when a store operation fails."""

