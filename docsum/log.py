"""Logging setup for the docsum CLI.

Call ``setup_logging`` once from ``cli.main()`` to configure the ``"docsum"``
package logger.  All other modules obtain a child logger via
``logging.getLogger(__name__)`` and let records propagate here.

API keys travel in a Gemini query string and an OpenAI ``Authorization``
header, so every handler installed here masks them before a record is
written.
"""

import logging
import re
import sys
from pathlib import Path

_FMT = "%(asctime)s  %(levelname)-7s %(name)s: %(message)s"
_DATE = "%H:%M:%S"

# Third-party loggers that are chatty below WARNING.  urllib3 logs full
# request URLs at DEBUG, pypdf warns about every recoverable PDF defect.
_QUIET_LOGGERS = ("urllib3", "pypdf")

_SECRET_PATTERNS = (
    (re.compile(r"([?&]key=)[^&\s]+"), r"\1***"),
    (re.compile(r"(Bearer\s+)\S+"), r"\1***"),
)


def redact(text: str) -> str:
    """Mask API keys in *text*."""
    for pattern, repl in _SECRET_PATTERNS:
        text = pattern.sub(repl, text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrite each record's message with API keys masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure the ``docsum`` logger for a CLI session.

    Args:
        verbose:  If True, set level to DEBUG (extraction details, request
                  sizes, HTTP connection logs).  Default level is INFO.
        log_file: If provided, also write records to this file.  Parent
                  directories are created automatically.

    Calling this function a second time is safe: existing handlers are
    cleared before new ones are added.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("docsum")
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = False

    fmt = logging.Formatter(_FMT, datefmt=_DATE)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(fmt)
        handler.addFilter(RedactingFilter())
        logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        third_party = logging.getLogger(name)
        third_party.handlers.clear()
        third_party.setLevel(logging.DEBUG if verbose else logging.ERROR)
        third_party.propagate = False
        if verbose:
            for handler in handlers:
                third_party.addHandler(handler)
