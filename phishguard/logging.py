"""
Structured Logging — Scan Telemetry for PhishGuard

Every logger in the service lives under the "phishguard" namespace, so
one call to setup_logging() configures the engine, the scan
orchestrator and the API together.

Log lines carry whitelisted context fields passed through ``extra=``:

  scan     risk_score, risk_category, patterns_count, text_length,
           duration_ms, engine_version, cached
  request  method, path, status_code, batch_size
  error    error, error_type

Anything else passed in ``extra`` is dropped, so email text can never
reach the logs by accident.

Usage:
    from phishguard.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Scan complete", extra={"risk_score": 40, "risk_category": "Medium"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


SERVICE_NAME = "phishguard"

LOG_LEVEL = os.getenv("PHISHGUARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("PHISHGUARD_LOG_FORMAT", "json")  # "json" or "text"

SCAN_FIELDS = (
    "risk_score", "risk_category", "patterns_count", "text_length",
    "duration_ms", "engine_version", "cached",
)
REQUEST_FIELDS = ("method", "path", "status_code", "batch_size")
ERROR_FIELDS = ("error", "error_type")

CONTEXT_FIELDS = SCAN_FIELDS + REQUEST_FIELDS + ERROR_FIELDS


def context_of(record: logging.LogRecord) -> dict:
    """Whitelisted context fields set on a record, in declaration order."""
    context = {}
    for key in CONTEXT_FIELDS:
        val = getattr(record, key, None)
        if val is not None:
            context[key] = val
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(context_of(record))

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development, context appended as key=value."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = context_of(record)
        if context:
            line += " | " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging() -> logging.Logger:
    """Configure the service logger. Safe to call more than once."""
    root = logging.getLogger(SERVICE_NAME)
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if LOG_FORMAT == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the service namespace.

    Accepts a module ``__name__``: "phishguard.detector" is used as is,
    while "api.main" becomes "phishguard.api.main".
    """
    if name == SERVICE_NAME or name.startswith(SERVICE_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{SERVICE_NAME}.{name}")
