"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the supervisor's retry
policy. Raw socket / JSON / pydantic errors never leave the module that hit
them; they are wrapped in one of these instead.

Classes:
  BotError          – Base for all internal errors.
  ConfigError       – Invalid or missing bot configuration (fatal).
  CredentialError   – Credential file unreadable or malformed (fatal).
  ValidationError   – Caller passed an invalid value, e.g. an empty chat line.
  TransientError    – Base for connection errors the supervisor retries.
  DialError         – TCP connection could not be established.
  ChatReadError     – Reading from the chat connection failed.
  WriteError        – Writing to the chat connection failed.

The supervisor retries exactly the TransientError subclasses. The
``transient`` flag mirrors that for code holding a plain BotError.
"""

from __future__ import annotations

from collections.abc import Mapping


class BotError(Exception):
    """Base class for all internal bot errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.
        transient: Whether an automated retry may resolve the error.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    transient = False
    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigError(BotError):
    """Raised when the bot configuration is missing or invalid."""


class CredentialError(BotError):
    """Raised when the credential file cannot be read or decoded.

    Credentials are not expected to appear without operator intervention, so
    this error aborts startup before any network activity.
    """


class ValidationError(BotError):
    """Raised synchronously for invalid input, before any I/O is attempted."""


class TransientError(BotError):
    """Base class for connection-level failures that are safe to retry."""

    transient = True


class DialError(TransientError):
    """Raised when the TCP connection to the chat server cannot be opened."""


class ChatReadError(TransientError):
    """Raised when reading from the chat connection fails.

    This is the sole signal of a lost connection: EOF, resets and stream
    errors all surface as ChatReadError.
    """


class WriteError(TransientError):
    """Raised when a line cannot be written to the chat connection."""


__all__ = [
    "BotError",
    "ConfigError",
    "CredentialError",
    "ValidationError",
    "TransientError",
    "DialError",
    "ChatReadError",
    "WriteError",
]
