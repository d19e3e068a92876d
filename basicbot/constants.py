"""
Defaults for the basic Twitch bot

Values here seed BotConfig. Any of them can be replaced at startup by an
environment variable of the same name.
"""

import os
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T", int, float)


def _from_env(name: str, default: T, cast: Callable[[str], T]) -> T:
    """Return ``cast(os.environ[name])``, or ``default`` when unset or unparsable."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        print(f"Ignoring {name}={value!r}: not a {cast.__name__}, keeping {default}")
        return default


def _get_env_int(name: str, default: int) -> int:
    return _from_env(name, default, int)


def _get_env_float(name: str, default: float) -> float:
    return _from_env(name, default, float)


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


# Twitch IRC endpoint (plain TCP, CRLF terminated lines)
DEFAULT_SERVER = _get_env_str("DEFAULT_SERVER", "irc.chat.twitch.tv")
DEFAULT_PORT = _get_env_int("DEFAULT_PORT", 6667)

# Keepalive probe sent by the server and the reply it expects back
KEEPALIVE_PROBE = _get_env_str("KEEPALIVE_PROBE", "PING :tmi.twitch.tv")
KEEPALIVE_REPLY = _get_env_str("KEEPALIVE_REPLY", "PONG :tmi.twitch.tv")

# Self-throttle applied after each processed chat line (seconds).
# Twitch allows 20 lines per 30 seconds for regular accounts.
DEFAULT_MSG_RATE = _get_env_float("DEFAULT_MSG_RATE", 30 / 20)

# Fixed pause before the supervisor restarts a dropped session (seconds)
RECONNECT_DELAY = _get_env_float("RECONNECT_DELAY", 1.0)

# Upper bound for establishing the TCP connection; reads are never timed out
CONNECT_TIMEOUT = _get_env_float("CONNECT_TIMEOUT", 10.0)

# Where the OAuth credentials JSON lives unless configured otherwise
DEFAULT_PRIVATE_PATH = _get_env_str("DEFAULT_PRIVATE_PATH", "private/oauth.json")

# Owner-only chat commands
SHUTDOWN_COMMAND = "tbdown"
REPEAT_COMMAND = "repeat"
