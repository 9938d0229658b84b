"""
epdqplus.logging
~~~~~~~~~~~~~~~~
Structured JSON logging for applications using the adapter.

The library itself only calls ``logging.getLogger(__name__)``; it never
configures handlers.  Applications (and the ``epdqplus`` CLI) call
:func:`configure_logging` once at startup to get:

- Standard fields: level, logger, message, service, timestamp
- Extra context fields from logger.info(..., extra={...})
- Redaction of credentials and card data in extra fields
- Exception formatting

Redaction reuses :mod:`epdqplus.redaction`, so a key added to
:data:`~epdqplus.redaction.REDACT_KEYS` is scrubbed from log lines too.

Usage::

    from epdqplus.logging import configure_logging

    configure_logging(level="DEBUG", service_name="checkout")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from epdqplus.redaction import REDACT_KEYS, redact_value

# Field names whose values should never be logged verbatim: every
# redacted request field plus the settings-side spellings.
SENSITIVE_KEYS: frozenset[str] = REDACT_KEYS | frozenset(
    {
        "sha_secret",
        "credential",
        "epdq_password",
        "epdq_shasign",
    }
)

# Attributes every LogRecord carries; anything else came in via ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _redact(value: Any, key: str = "") -> Any:
    """Recursively redact sensitive values from a structure."""
    value = redact_value(key, value, SENSITIVE_KEYS)
    if isinstance(value, dict):
        return {k: _redact(v, k) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` context is redacted and merged in."""

    def __init__(self, service_name: str = "epdqplus") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, _redact(val, key))
            for key, val in record.__dict__.items()
            if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: str = "INFO",
    service_name: str = "epdqplus",
    *,
    quiet_http: bool = True,
) -> None:
    """Install the JSON formatter on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Service name to include in all log entries.
        quiet_http: If True, reduce httpx/httpcore chatter to WARNING.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service_name=service_name))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]

    if quiet_http:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
