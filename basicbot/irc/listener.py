"""Chat read loop: one reader per connection, one line at a time."""

from __future__ import annotations

import asyncio
import logging

from ..config.model import BotConfig
from ..errors import ChatReadError, ValidationError, WriteError, log_error
from ..logs.logger import logger
from .connection import IRCConnection
from .dispatcher import CommandDispatcher
from .models import DispatchOutcome
from .parser import (
    ChatMessage,
    Keepalive,
    Unrecognized,
    is_auth_failure,
    parse_command,
    parse_line,
)


class ChatReadLoop:
    """Reads the chat connection until it fails or the owner shuts it down.

    ``run`` returns normally only after a shutdown command. Connection loss
    surfaces as ChatReadError (or WriteError when a reply could not be sent),
    always after the connection has been closed. Nothing is retained between
    lines.
    """

    def __init__(
        self,
        connection: IRCConnection,
        dispatcher: CommandDispatcher,
        config: BotConfig,
    ) -> None:
        self.connection = connection
        self.dispatcher = dispatcher
        self.config = config

    async def run(self) -> None:
        logger.log_event("irc", "watching", channel=self.config.channel)
        while True:
            line = await self._read_line()
            logger.log_event("irc", "raw", raw=line)

            parsed = parse_line(line, self.config.keepalive_probe)
            if isinstance(parsed, Keepalive):
                await self._reply_keepalive()
                continue

            if isinstance(parsed, ChatMessage):
                outcome = await self._handle_chat_message(parsed)
                if outcome is DispatchOutcome.SHUTDOWN:
                    return
            else:
                await self._handle_unrecognized(parsed)

            # Self-throttle: at most one processed line per msg_rate.
            await asyncio.sleep(self.config.msg_rate)

    async def _read_line(self) -> str:
        try:
            return await self.connection.read_line()
        except ChatReadError as e:
            logger.log_event(
                "irc",
                "read_failed",
                level=logging.WARNING,
                channel=self.config.channel,
                error=str(e),
            )
            await self.connection.disconnect()
            raise

    async def _reply_keepalive(self) -> None:
        try:
            await self.connection.send_line(self.config.keepalive_reply)
        except WriteError as e:
            await self._fail_write(e)
        logger.log_event(
            "irc", "keepalive", level=logging.DEBUG, reply=self.config.keepalive_reply
        )

    async def _handle_chat_message(self, message: ChatMessage) -> DispatchOutcome:
        logger.log_event("irc", "privmsg", author=message.author, message=message.body)
        command = parse_command(message.body)
        if command is None:
            return DispatchOutcome.CONTINUE
        try:
            return await self.dispatcher.dispatch(command, message.author)
        except WriteError as e:
            await self._fail_write(e)
        except ValidationError as e:
            log_error(
                f"Command !{command.name} failed",
                e,
                context={"author": message.author},
                level=logging.WARNING,
            )
        return DispatchOutcome.CONTINUE

    async def _handle_unrecognized(self, parsed: Unrecognized) -> None:
        # The server closes the socket itself after a rejected login.
        if is_auth_failure(parsed.raw):
            logger.log_event(
                "irc",
                "auth_failed",
                level=logging.ERROR,
                name=self.config.name,
                raw=parsed.raw,
            )
            return
        logger.log_event("irc", "unrecognized", level=logging.DEBUG)

    async def _fail_write(self, error: WriteError) -> None:
        logger.log_event(
            "irc",
            "write_failed",
            level=logging.WARNING,
            server=self.config.server,
            error=str(error),
        )
        await self.connection.disconnect()
        raise error
