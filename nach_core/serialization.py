"""JSON-friendly conversion of models and results."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from nach_core.models.results import DashboardStats, ParsedFile


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if isinstance(obj, DashboardStats):
        return stats_to_dict(obj)
    if isinstance(obj, ParsedFile):
        return parsed_file_to_dict(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Shallow field walk; nested dataclasses are converted recursively."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def stats_to_dict(stats: DashboardStats) -> dict:
    """Include the derived totals and rates alongside the bucket values."""
    data = dataclass_to_dict(stats)
    data.update(
        {
            "total": stats.total,
            "total_amount": serialize_value(stats.total_amount),
            "success_rate": round(stats.success_rate, 2),
            "error_rate": round(stats.error_rate, 2),
        }
    )
    return data


def parsed_file_to_dict(parsed: ParsedFile) -> dict:
    return {
        **dataclass_to_dict(parsed.context),
        "total_count": parsed.total_count,
        "valid_count": parsed.valid_count,
        "parse_error_count": parsed.parse_error_count,
        "truncated": parsed.truncated,
        "transactions": [dataclass_to_dict(t) for t in parsed.transactions],
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value
