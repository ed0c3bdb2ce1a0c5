"""Centralized logging configuration."""

import logging
import sys
from collections import Counter
from datetime import datetime

from .config import Config

MASK = "***"


class MicrosecondFormatter(logging.Formatter):
    """Custom formatter that includes microsecond precision in timestamps.

    Example output:
        2024-01-15 14:23:45.123456 - bitkub - INFO - [rest.py:42:_send] - Message here
    """

    def formatTime(self, record, datefmt=None):
        ct = datetime.fromtimestamp(record.created)
        s = ct.strftime(datefmt or "%Y-%m-%d %H:%M:%S")
        return f"{s}.{int(record.created % 1 * 1_000_000):06d}"


class CredentialFilter(logging.Filter):
    """
    Masks registered credential strings in every record passing the handler.

    API keys and secrets are registered by the client that owns them and
    released when it closes; any occurrence in the formatted message is
    replaced with ``***``. Registrations are counted, so two clients sharing
    a key keep it masked until both have released it.
    """

    def __init__(self):
        super().__init__()
        self._secrets: Counter[str] = Counter()

    def register(self, *values: str) -> None:
        self._secrets.update(v for v in values if v)

    def unregister(self, *values: str) -> None:
        for value in values:
            if self._secrets.get(value, 0) > 1:
                self._secrets[value] -= 1
            else:
                self._secrets.pop(value, None)

    def is_masked(self, value: str) -> bool:
        return value in self._secrets

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = message
        for secret in sorted(self._secrets, key=len, reverse=True):
            masked = masked.replace(secret, MASK)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


credential_filter = CredentialFilter()


def redact(*values: str) -> None:
    """Never let these strings reach a log line."""
    credential_filter.register(*values)


def release(*values: str) -> None:
    """Undo one earlier redact() of these strings."""
    credential_filter.unregister(*values)


def setup_logger(name: str = "bitkub") -> logging.Logger:
    """Set up and return a configured logger."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            MicrosecondFormatter(
                "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d:%(funcName)s] - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

    if credential_filter not in logger.filters:
        logger.addFilter(credential_filter)

    return logger


logger = setup_logger()
