"""JSON-line logging shared by the service and the smoke runner.

Each record becomes one JSON object on stdout: ts, level, logger, service and
message, plus whatever structured fields were passed through `extra`. Fields
that could carry credentials are masked before they are written.
setup_logging() is idempotent, so reloads and test sessions never stack handlers.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import LogRecord
from typing import Any

__all__ = ["JsonFormatter", "REDACTED", "setup_logging", "get_logger"]

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SERVICE_NAME = "math-api"
REDACTED = "[redacted]"

# Anything a bare LogRecord already has is bookkeeping, not a structured field.
_RECORD_ATTRS = frozenset(vars(LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}
_SENSITIVE_KEYS = frozenset({"password", "token", "authorization", "secret", "jwt_secret"})


def _mask(key: str, value: Any) -> Any:
    return REDACTED if key.lower() in _SENSITIVE_KEYS else value


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line tagged with the emitting service."""

    def __init__(self, service: str = SERVICE_NAME) -> None:
        super().__init__()
        self.service = service

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
        }
        if isinstance(record.msg, dict):
            payload.update({k: _mask(k, v) for k, v in record.msg.items()})
        else:
            payload["message"] = record.getMessage()

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in payload:
                payload[key] = _mask(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str | int = _DEFAULT_LEVEL, *, service: str = SERVICE_NAME) -> None:
    """Attach a JSON stdout handler to the root logger and route uvicorn through it."""
    root = logging.getLogger()
    if root.handlers:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter(service))
    root.setLevel(level)
    root.addHandler(handler)

    # uvicorn installs its own handlers; drop them and let records reach root.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.handlers.clear()
        lg.propagate = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a named logger, e.g. get_logger("service.auth")."""
    return logging.getLogger(name if name else __name__)
