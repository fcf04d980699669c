"""
Logger factory.

Modules obtain their logger once at import time:

    >>> from shared.logging import get_logger
    >>> log = get_logger(__name__)
    >>> log.info("login_success", user_id="123")
"""

from __future__ import annotations

import structlog
from structlog.stdlib import BoundLogger


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def log_with_context(logger: BoundLogger, **context) -> BoundLogger:
    """
    Bind context to a logger for all subsequent log calls.

    Useful for adding common context (like user_id, organization_id) that
    will be included in all logs within a scope.
    """
    return logger.bind(**context)


__all__ = ["get_logger", "log_with_context"]
