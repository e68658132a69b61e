"""
Logging configuration for the list service.

``setup_logging`` configures the root logger once: a console handler
and, when ``LOG_FILE`` is set, a size-rotated file handler.  Records are
rendered either as plain text lines or, with ``LOG_FORMAT=json``, as one
JSON object per line for log shippers.  Access tokens never appear in
either form.
"""

import json
import logging
import logging.handlers
import re
from datetime import datetime, timezone
from typing import List, Optional

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO.
_NOISY_LOGGERS = ("urllib3", "requests")

_TOKEN_PATTERN = re.compile(r"(X-Access-Token['\"]?\s*[:=]\s*['\"]?)[^'\",\s}]+", re.IGNORECASE)


class TokenRedactingFilter(logging.Filter):
    """Masks ``X-Access-Token`` values that end up in a log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _TOKEN_PATTERN.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def build_handlers(
    fmt: str = "text",
    logfile: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> List[logging.Handler]:
    """Create the console and optional rotating file handler."""
    if fmt.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                logfile, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(TokenRedactingFilter())
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    fmt: str = "text",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Configure the root logger unless it already has handlers.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive; unknown names mean ``INFO``.
    logfile : Optional[str]
        File to also write records to, rotated at ``max_bytes``.
    fmt : str
        ``"text"`` or ``"json"``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    for handler in build_handlers(fmt, logfile, max_bytes, backup_count):
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
