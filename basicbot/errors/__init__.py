"""Error types and error logging helpers."""

from .handling import classify_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    BotError,
    ChatReadError,
    ConfigError,
    CredentialError,
    DialError,
    TransientError,
    ValidationError,
    WriteError,
)

__all__ = [
    "BotError",
    "ChatReadError",
    "ConfigError",
    "CredentialError",
    "DialError",
    "TransientError",
    "ValidationError",
    "WriteError",
    "classify_error",
    "log_error",
]
