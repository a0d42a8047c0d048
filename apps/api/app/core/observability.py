"""Logging setup and helpers for safe structured log fields."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a root handler unless the host process already configured one."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a short one-way token so log lines correlate without exposing ids."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"
    return f"{prefix}-{hashlib.sha256(text.encode('utf-8')).hexdigest()[:12]}"
