"""Structured logging configuration for nach-core."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = ("psycopg", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for nach-core.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        "standard" for one line per record, "json" for one JSON object per
        record with bound context (file name, batch, actor) as top-level keys.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = ContextFormatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("nach_core").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "extra", None)
    return dict(context) if isinstance(context, dict) else {}


class ContextFormatter(logging.Formatter):
    """Standard formatter that appends bound context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{line} | {pairs}"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(_context(record))

        # Decimal amounts and enums fall back to str()
        return json.dumps(log_data, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter carrying per-file or per-request context.

    The context travels on ``record.extra`` so both formatters can render
    it; per-call ``extra`` values are merged over the bound ones.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        context = dict(self.extra or {})
        context.update(kwargs.pop("extra", None) or {})
        kwargs["extra"] = {"extra": context}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> logging.Logger | ContextAdapter:
    """Get a logger with the given name.

    Parameters
    ----------
    name : str
        Logger name (usually __name__).
    **context
        Values to attach to every record, e.g. ``file_name`` or ``actor``.

    Returns
    -------
    logging.Logger | ContextAdapter
        The plain logger, or an adapter when context is given.
    """
    logger = logging.getLogger(name)
    if not context:
        return logger
    return ContextAdapter(logger, context)
