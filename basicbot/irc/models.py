"""Shared IRC data models."""

from __future__ import annotations

from enum import Enum, auto


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    JOINED = auto()


class DispatchOutcome(Enum):
    """What the read loop should do after a command was dispatched."""

    CONTINUE = auto()
    SHUTDOWN = auto()
