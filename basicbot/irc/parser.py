"""Line parsing for the Twitch chat protocol.

Pure functions only: each raw line becomes a ParsedLine value and chat bodies
may yield a Command. Nothing here keeps state between lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..constants import KEEPALIVE_PROBE

# ":<author>!<user>@<host>.tmi.twitch.tv PRIVMSG #<channel>[ :<body>]"
# Group 1 is the author, group 2 the message type and group 3 the body.
CHAT_MESSAGE_RE = re.compile(
    r"^:(\w+)!\w+@\w+\.tmi\.twitch\.tv (PRIVMSG) #\w+(?: :(.*))?$", re.ASCII
)

# "!<name>[ <arg>]"; only the first word after the name is captured.
COMMAND_RE = re.compile(r"^!(\w+)\s?(\w+)?", re.ASCII)

AUTH_FAILURE_NOTICES = ("Login authentication failed", "Improperly formatted auth")


@dataclass(frozen=True, slots=True)
class Keepalive:
    raw: str


@dataclass(frozen=True, slots=True)
class ChatMessage:
    author: str
    body: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    raw: str


ParsedLine = Keepalive | ChatMessage | Unrecognized


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    arg: str | None = None


def parse_line(line: str, keepalive_probe: str = KEEPALIVE_PROBE) -> ParsedLine:
    """Classify one inbound line.

    The keepalive check is an exact comparison against ``keepalive_probe``.
    Anything that is neither a keepalive nor a chat message is Unrecognized;
    this function never raises for string input.
    """
    if line == keepalive_probe:
        return Keepalive(raw=line)
    match = CHAT_MESSAGE_RE.match(line)
    if match is None:
        return Unrecognized(raw=line)
    return ChatMessage(author=match.group(1), body=match.group(3) or "")


def parse_command(body: str) -> Command | None:
    """Extract ``!name [arg]`` from a chat body.

    Multi-word arguments are truncated to their first word, e.g.
    ``!repeat hello there`` gives ``Command("repeat", "hello")``.
    """
    match = COMMAND_RE.match(body)
    if match is None:
        return None
    return Command(name=match.group(1), arg=match.group(2))


def is_auth_failure(line: str) -> bool:
    """True for the NOTICE Twitch sends when it rejects PASS/NICK."""
    if not line.startswith(":tmi.twitch.tv NOTICE "):
        return False
    return any(notice in line for notice in AUTH_FAILURE_NOTICES)


def build_privmsg(channel: str, message: str) -> str:
    # No leading ':' before the body, matching what the server has always accepted.
    return f"PRIVMSG #{channel} {message}"
