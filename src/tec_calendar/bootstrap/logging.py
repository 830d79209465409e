from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Iterable, Optional

# Verbosity names accepted on the command line, mapped onto stdlib levels.
LEVEL_ALIASES = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "http": logging.INFO,
    "verbose": logging.DEBUG,
    "debug": logging.DEBUG,
    "silly": logging.DEBUG,
}

_BASIC_AUTH = re.compile(r"(Basic\s+)[A-Za-z0-9+/=]+")
_MASK = "********"


def resolve_level(level: Optional[str]) -> int:
    if not level:
        return logging.INFO
    return LEVEL_ALIASES.get(level.strip().lower(), logging.INFO)


class RedactingFilter(logging.Filter):
    """Mask credentials in log messages before any handler formats them."""

    def __init__(self, secrets: Iterable[Optional[str]] = ()) -> None:
        super().__init__()
        self.secrets = tuple(secret for secret in secrets if secret)

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, _MASK)
        return _BASIC_AUTH.sub(rf"\g<1>{_MASK}", text)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(
    level: Optional[str] = None,
    *,
    log_file: Optional[str] = None,
    secrets: Iterable[Optional[str]] = (),
) -> logging.Logger:
    """Configure application-wide logging on stderr and an optional log file.

    stdout is left untouched because the MCP stdio transport owns it.
    """

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    redactor = RedactingFilter(secrets)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(redactor)

    logging.basicConfig(level=resolve_level(level), handlers=handlers, force=True)
    logger = logging.getLogger("tec_calendar")
    logger.debug("Logging configured (level=%s, file=%s)", level or "info", log_file)
    return logger
