from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    CONNECT_TIMEOUT,
    DEFAULT_MSG_RATE,
    DEFAULT_PORT,
    DEFAULT_PRIVATE_PATH,
    DEFAULT_SERVER,
    KEEPALIVE_PROBE,
    KEEPALIVE_REPLY,
    RECONNECT_DELAY,
)


def _normalize_name(value: Any) -> str:
    """Strip whitespace and a leading '#', lower-case the result."""
    if not isinstance(value, str):
        raise ValueError("must be a string")
    normalized = value.strip().lstrip("#").lower()
    if not normalized:
        raise ValueError("must not be empty")
    return normalized


class BotConfig(BaseModel):
    """Settings for one bot instance, read-only once created.

    Attributes:
        channel: Channel to join, without the leading '#'. Its owner is the
            only user allowed to run owner commands.
        server: Chat server host.
        port: Chat server TCP port.
        name: Bot display name sent with NICK.
        msg_rate: Seconds to pause after each processed line.
        private_path: Path of the JSON credential file.
        reconnect_delay: Seconds to wait before restarting a dropped session.
        connect_timeout: Seconds allowed for the TCP dial.
        keepalive_probe: Exact inbound line that requires a keepalive reply.
        keepalive_reply: Line written back for each keepalive probe.
        event_socket_url: Optional websocket URL for the event listener.
    """

    model_config = ConfigDict(frozen=True)

    channel: str
    name: str
    server: str = DEFAULT_SERVER
    port: int = Field(default=DEFAULT_PORT, gt=0, lt=65536)
    msg_rate: float = Field(default=DEFAULT_MSG_RATE, ge=0)
    private_path: str = DEFAULT_PRIVATE_PATH
    reconnect_delay: float = Field(default=RECONNECT_DELAY, ge=0)
    connect_timeout: float = Field(default=CONNECT_TIMEOUT, gt=0)
    keepalive_probe: str = Field(default=KEEPALIVE_PROBE, min_length=1)
    keepalive_reply: str = Field(default=KEEPALIVE_REPLY, min_length=1)
    event_socket_url: str | None = None

    @field_validator("channel", "name", mode="before")
    @classmethod
    def validate_names(cls, v: Any) -> str:
        return _normalize_name(v)

    @field_validator("server")
    @classmethod
    def validate_server(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("server must not be empty")
        return v


class Credentials(BaseModel):
    """OAuth credentials; only ever held in memory."""

    model_config = ConfigDict(extra="ignore")

    password: str = ""

    def __repr__(self) -> str:
        state = "set" if self.password else "empty"
        return f"Credentials(password=<{state}>)"

    __str__ = __repr__
