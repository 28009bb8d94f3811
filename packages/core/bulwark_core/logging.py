"""
bulwark_core.logging
~~~~~~~~~~~~~~~~~~~~
Structured JSON logging for services that host Bulwark.

The header filter itself never logs. Host services do, and what they log
is mostly HTTP metadata, so redaction here understands header shapes:

- ``{"Authorization": "..."}`` mappings
- ``[("cookie", "..."), ...]`` pair lists, as returned by
  ``request.headers.items()`` or carried in an ASGI scope (str or bytes)

Usage::

    from bulwark_core.logging import configure_logging

    configure_logging(level="INFO", service_name="bulwark-edge")
    logger.debug("Request headers", extra={"headers": request.headers.items()})
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

REDACTED = "[REDACTED]"

# Header and field names whose values never reach a log sink.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
        "api_key",
        "token",
        "access_token",
        "refresh_token",
        "password",
        "secret",
    }
)

# LogRecord attributes that are never copied into the payload.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _is_sensitive(key: str | bytes) -> bool:
    if isinstance(key, bytes):
        key = key.decode("latin-1")
    return key.lower() in SENSITIVE_KEYS


def _redact(value: Any, key: str = "") -> Any:
    if key and _is_sensitive(key):
        return REDACTED
    if isinstance(value, dict):
        return {k: _redact(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact_item(item) for item in value]
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def _redact_item(item: Any) -> Any:
    # A two-element (name, value) entry is treated as a header pair.
    if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], (str, bytes)):
        name, value = item
        if isinstance(name, bytes):
            name = name.decode("latin-1")
        return [name, REDACTED if _is_sensitive(name) else _redact(value)]
    return _redact(item)


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    Fixed fields are level, logger, message, service and timestamp. Any
    ``extra={...}`` fields follow, redacted, then ``exc_info`` if present.
    """

    def __init__(self, service_name: str = "bulwark") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "timestamp": self.formatTime(record),
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
    service_name: str = "bulwark",
    *,
    suppress_uvicorn_access: bool = True,
) -> None:
    """Install a JSON stdout handler on the root logger.

    Call once at service startup, before anything else logs. Unknown level
    names fall back to INFO. ``uvicorn.access`` is raised to WARNING by
    default because host services write their own access line.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service_name=service_name))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]

    if suppress_uvicorn_access:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
