"""File-level metadata derived from NACH file naming conventions.

Example: ``ACH-DR-BDBL-03062024-TPZ000433633-P3FC-INW.txt`` is a debit
file for batch ``TPZ000433633``.
"""

import re
import time

from nach_core.models.enums import FileType

BATCH_TOKEN_PATTERN = re.compile(r"[A-Z]{2,3}[0-9]{6,}")
FALLBACK_TOKEN_PATTERN = re.compile(r"[A-Z0-9]{4,}")
CONSTANT_SEGMENTS = frozenset({"BDBL", "INW"})
PLACEHOLDER_PREFIX = "BTCH"


def extract_file_type(file_name: str | None) -> FileType:
    """``DR`` when the name carries the debit token, otherwise ``CR``."""
    if file_name and "DR" in file_name:
        return FileType.DR
    return FileType.CR


def _segments(file_name: str) -> list[str]:
    stem = file_name.rsplit(".", 1)[0] if "." in file_name else file_name
    return stem.split("-")


def extract_batch_number(file_name: str | None, millis: int | None = None) -> str:
    """Find the batch token in a file name.

    Tries a letters-then-digits token (``TPZ000433633``, ``HV000004``) first,
    then any other uppercase alphanumeric segment of four or more characters
    that is not a known constant, and finally builds a timestamp placeholder.
    """
    if file_name:
        segments = _segments(file_name)
        for part in segments:
            if BATCH_TOKEN_PATTERN.fullmatch(part):
                return part
        for part in segments:
            if FALLBACK_TOKEN_PATTERN.fullmatch(part) and part not in CONSTANT_SEGMENTS:
                return part
    return placeholder_batch_number(file_name, millis)


def placeholder_batch_number(file_name: str | None, millis: int | None = None) -> str:
    """Timestamp-derived batch number that still satisfies the batch format."""
    if millis is None:
        millis = int(time.time() * 1000)
    prefix = PLACEHOLDER_PREFIX
    if file_name and len(file_name) > 10:
        letters = "".join(ch for ch in file_name.upper() if ch.isascii() and ch.isalnum())
        if len(letters) >= 4:
            prefix = letters[:4]
    return f"{prefix}{millis}"
