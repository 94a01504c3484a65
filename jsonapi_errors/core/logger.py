"""
Centralized logging module for jsonapi-errors.

Follows Layer 6 rules:
- Structured JSON logging suitable for Grafana/Loki/ELK
- Appropriate log levels (debug for construction, error for server failures)
- Internal messages of server errors are logged here, never sent to clients
"""
import logging
import json
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from jsonapi_errors.core.config import settings

logger = logging.getLogger("jsonapi_errors")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

_handler = logging.StreamHandler()


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in ("kind", "status_code", "code", "error_id", "convention", "meta"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


_handler.setFormatter(JSONFormatter())
logger.addHandler(_handler)

# Prevent duplicate logs
logger.propagate = False


def log_error_event(
    kind: str,
    status_code: int,
    code: Optional[str] = None,
    error_id: Optional[str] = None,
    convention: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
    level: str = "debug",
    message: str = "Error constructed",
) -> None:
    """
    Log a structured record describing one error.

    Args:
        kind: Error kind name (e.g., "bad_request", "wrap")
        status_code: HTTP status code of the error
        code: Application-specific error code (optional)
        error_id: Occurrence identifier (optional)
        convention: Calling convention used to build the error (optional)
        meta: Additional metadata dict (optional)
        level: Log level ("debug", "info", "warning", "error")
        message: Log message
    """
    log_method = getattr(logger, level.lower(), logger.debug)
    extra: Dict[str, Any] = {
        "kind": kind,
        "status_code": status_code,
    }
    if code:
        extra["code"] = code
    if error_id:
        extra["error_id"] = error_id
    if convention:
        extra["convention"] = convention
    if meta:
        extra["meta"] = meta

    log_method(message, extra=extra)
