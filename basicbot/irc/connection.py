"""Connection lifecycle for the chat server: dial, handshake, teardown."""

from __future__ import annotations

import asyncio
import logging
import time

from ..config.model import BotConfig
from ..errors import ChatReadError, WriteError
from ..logs.logger import logger
from .models import ConnectionState


class IRCConnection:
    """Owns the single live stream pair to the chat server.

    A connection is replaced, never reused: ``connect`` closes any previous
    stream before dialing again. After ``disconnect`` every read or write
    fails with ChatReadError / WriteError instead of touching a closed stream.
    """

    def __init__(self, config: BotConfig) -> None:
        self.config = config
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.state = ConnectionState.DISCONNECTED
        self.start_time = 0.0
        self._write_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self.writer is not None

    @property
    def uptime(self) -> float:
        """Seconds since the current connection was established."""
        if not self.connected:
            return 0.0
        return time.monotonic() - self.start_time

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def connect(self) -> bool:
        """Dial the configured server.

        Returns:
            True when connected, False when the dial failed. Failures are
            logged and left to the caller to retry.
        """
        if self.connected:
            await self.disconnect()
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc", "connect_start", server=self.config.server, port=self.config.port
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.config.server, self.config.port),
                timeout=self.config.connect_timeout,
            )
        except (TimeoutError, OSError) as e:
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.WARNING,
                server=self.config.server,
                error=str(e) or type(e).__name__,
            )
            self._set_state(ConnectionState.DISCONNECTED)
            return False

        self.start_time = time.monotonic()
        self._set_state(ConnectionState.CONNECTED)
        logger.log_event("irc", "connect_success", server=self.config.server)
        return True

    async def join(self, password: str) -> None:
        """Send PASS, NICK and JOIN, in that order.

        Precondition: ``connect`` returned True. Calling this without a live
        connection is a programming error and raises RuntimeError.
        """
        if not self.connected:
            raise RuntimeError("join() called without a live connection")
        logger.log_event("irc", "join_start", channel=self.config.channel)
        await self.send_line(f"PASS {password}")
        await self.send_line(f"NICK {self.config.name}")
        await self.send_line(f"JOIN #{self.config.channel}")
        self._set_state(ConnectionState.JOINED)
        logger.log_event(
            "irc", "join_success", channel=self.config.channel, name=self.config.name
        )

    async def send_line(self, line: str) -> None:
        """Write ``line`` followed by CRLF; all writes are serialized."""
        async with self._write_lock:
            writer = self.writer
            if writer is None:
                raise WriteError(
                    "Connection is closed", data={"server": self.config.server}
                )
            try:
                writer.write(f"{line}\r\n".encode())
                await writer.drain()
            except (ConnectionError, OSError) as e:
                raise WriteError(
                    f"Failed to write to {self.config.server}: {e}",
                    data={"server": self.config.server},
                ) from e

    async def read_line(self) -> str:
        """Read one line, without its terminator.

        Raises:
            ChatReadError: On EOF, a stream error, or when disconnected.
        """
        reader = self.reader
        if reader is None:
            raise ChatReadError("Connection is closed")
        try:
            data = await reader.readline()
        except (
            asyncio.IncompleteReadError,
            asyncio.LimitOverrunError,
            ValueError,
            OSError,
        ) as e:
            raise ChatReadError(f"Failed to read from channel: {e}") from e
        if not data:
            raise ChatReadError("Connection closed by server")
        return data.decode("utf-8", errors="replace").rstrip("\r\n")

    async def disconnect(self) -> None:
        """Close the connection. Safe to call repeatedly."""
        writer = self.writer
        if writer is None:
            logger.log_event("irc", "already_disconnected", level=logging.DEBUG)
            return
        uptime = self.uptime
        self.reader = None
        self.writer = None
        try:
            writer.close()
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.log_event(
                "irc",
                "close_error",
                level=logging.DEBUG,
                server=self.config.server,
                error=str(e),
            )
        self.start_time = 0.0
        self._set_state(ConnectionState.DISCONNECTED)
        logger.log_event(
            "irc", "disconnected", server=self.config.server, uptime=uptime
        )
