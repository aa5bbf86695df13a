# dealscout/core/logs.py
"""
Package logging setup.

- stderr handler for the `dealscout` logger tree (configured once)
- rotating file log + DEBUG level when DEALSCOUT_DEBUG is on
- API keys found in the environment are redacted from every record
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

_ROOT_NAME = "dealscout"
_KEY_VARS = ("DEALSCOUT_LLM_API_KEY", "GROQ_API_KEY", "OPENAI_API_KEY")
_CONFIGURED = False


def debug_enabled() -> bool:
    return os.getenv("DEALSCOUT_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _redact(s: str) -> str:
    for k in _KEY_VARS:
        val = os.getenv(k)
        if val:
            s = s.replace(val, "[REDACTED]")
    return s


class RedactingFilter(logging.Filter):
    """Strip known secrets from the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True
        redacted = _redact(msg)
        if redacted != msg:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(*, debug: bool | None = None, log_dir: str = "logs") -> logging.Logger:
    """Attach handlers to the package logger. Safe to call repeatedly."""
    global _CONFIGURED
    logger = logging.getLogger(_ROOT_NAME)
    if _CONFIGURED:
        return logger

    if debug is None:
        debug = debug_enabled()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="(%Y-%m-%d %H:%M:%S)",
    )

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    stream.addFilter(RedactingFilter())
    logger.addHandler(stream)

    if debug:
        log_path = os.path.join(log_dir, "dealscout_debug.log")
        try:
            os.makedirs(log_dir, exist_ok=True)
            handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            handler.setFormatter(formatter)
            handler.addFilter(RedactingFilter())
            logger.addHandler(handler)
        except OSError:
            # unwritable log dir: stderr output keeps working
            logger.warning("could not open debug log at %s", log_path)

    _CONFIGURED = True
    return logger


def log_raw_preview(logger: logging.Logger, text: str, label: str) -> None:
    """DEBUG-only preview of raw model output."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    preview = text if len(text) <= 2000 else text[:2000] + "…"
    logger.debug("%s (preview):\n%s", label, preview)


__all__ = ["configure_logging", "debug_enabled", "log_raw_preview", "RedactingFilter"]
