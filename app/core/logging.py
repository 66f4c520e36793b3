"""Structured logging configuration.

Log calls across the app use snake_case event names with context passed via
``extra={...}``.  ``ContextFormatter`` renders those extra fields as
``key=value`` pairs after the message so they reach stdout instead of being
silently dropped by the stock formatter.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields, sorted by key."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if not extras:
            return line
        context = " ".join(f"{key}={extras[key]!r}" for key in sorted(extras))
        return f"{line} | {context}"


def setup_logging() -> None:
    """Configure the root logger from ``settings.LOG_LEVEL``.

    Installs a single stdout handler; calling it again replaces the handler
    rather than stacking another one.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(ContextFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in ("httpx", "httpcore", "uvicorn.access", "apscheduler"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
