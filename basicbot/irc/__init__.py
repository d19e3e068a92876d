"""IRC subsystem package.

Contains connection, parsing, read loop and command dispatch modules for the
Twitch chat connection.
"""

from .connection import IRCConnection  # noqa: F401
from .dispatcher import CommandDispatcher  # noqa: F401
from .listener import ChatReadLoop  # noqa: F401
from .models import ConnectionState, DispatchOutcome  # noqa: F401
from .parser import (  # noqa: F401
    ChatMessage,
    Command,
    Keepalive,
    ParsedLine,
    Unrecognized,
    build_privmsg,
    is_auth_failure,
    parse_command,
    parse_line,
)

__all__ = [
    "ChatMessage",
    "ChatReadLoop",
    "Command",
    "CommandDispatcher",
    "ConnectionState",
    "DispatchOutcome",
    "IRCConnection",
    "Keepalive",
    "ParsedLine",
    "Unrecognized",
    "build_privmsg",
    "is_auth_failure",
    "parse_command",
    "parse_line",
]
