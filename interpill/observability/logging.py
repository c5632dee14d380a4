from __future__ import annotations

import logging
import os
import re
from typing import Final

_HANDLER_ATTACHED: bool = False
_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Credentials that can end up in exception text from the HTTP client
_SECRET_PATTERNS: Final[list[tuple[re.Pattern[str], str]]] = [
    (re.compile(r"(Bearer\s+)\S+"), r"\1[REDACTED]"),
    (re.compile(r"([?&]key=)[^&\s]+"), r"\1[REDACTED]"),
    (re.compile(r"(x-goog-api-key['\"]?\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), r"\1[REDACTED]"),
]


class RedactingFormatter(logging.Formatter):
    """Formatter that masks API keys and bearer tokens in the final message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for pattern, replacement in _SECRET_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def _resolve_level() -> int:
    level_name = os.getenv("INTERPILL_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; the root stream handler is attached once per process."""
    global _HANDLER_ATTACHED

    level = _resolve_level()

    if not _HANDLER_ATTACHED:
        handler = logging.StreamHandler()
        handler.setFormatter(RedactingFormatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root = logging.getLogger()
        root.addHandler(handler)
        root.setLevel(level)
        _HANDLER_ATTACHED = True

    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
