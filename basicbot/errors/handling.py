from __future__ import annotations

import logging

from ..logs.logger import logger
from .internal import (
    BotError,
    ConfigError,
    CredentialError,
    TransientError,
    ValidationError,
)


def classify_error(error: BaseException) -> str:
    """Return a short category name for ``error``."""
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, CredentialError):
        return "credentials"
    if isinstance(error, TransientError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ValidationError):
        return "validation"
    if isinstance(error, BotError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: BaseException,
    context: dict[str, object] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level, ERROR unless the caller knows better.
    """
    fields: dict[str, object] = {}
    if isinstance(error, BotError):
        fields.update(error.data)
    if context:
        fields.update(context)
    for reserved in ("domain", "action", "level", "human", "exc_info"):
        fields.pop(reserved, None)
    fields.update(
        message=message,
        error=str(error) or type(error).__name__,
        error_type=classify_error(error),
    )
    logger.log_event("error", "logged", level=level, **fields)
