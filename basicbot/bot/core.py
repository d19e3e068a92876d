"""BasicBot: one bot, one channel, one connection at a time."""

from __future__ import annotations

import logging

from ..config.credentials import CredentialProvider, FileCredentialProvider
from ..config.model import BotConfig, Credentials
from ..errors import ValidationError
from ..events import EventListener, EventSocketListener
from ..irc import ChatReadLoop, CommandDispatcher, IRCConnection, build_privmsg
from ..logs.logger import logger
from .supervisor import Supervisor


class BasicBot:
    """Connects to a Twitch channel and watches its chat.

    The lifecycle is connect -> join_channel -> handle_chat, driven by
    ``start``, which restarts the cycle whenever the connection is lost and
    returns once the channel owner sends the shutdown command.
    """

    def __init__(
        self,
        config: BotConfig,
        credential_provider: CredentialProvider | None = None,
        event_listener: EventListener | None = None,
    ) -> None:
        self.config = config
        self.credential_provider = credential_provider or FileCredentialProvider(
            config.private_path
        )
        self.credentials: Credentials | None = None
        if event_listener is None and config.event_socket_url:
            event_listener = EventSocketListener(config.event_socket_url)

        self.connection = IRCConnection(config)
        self.dispatcher = CommandDispatcher(self)
        self.read_loop = ChatReadLoop(self.connection, self.dispatcher, config)
        self.supervisor = Supervisor(self, event_listener=event_listener)

    def read_credentials(self) -> Credentials:
        """Load the OAuth token once; raises CredentialError on failure."""
        password = self.credential_provider.get_password()
        self.credentials = Credentials(password=password)
        path = self.credential_provider.describe()
        if password:
            logger.log_event("bot", "credentials_loaded", path=path)
        else:
            logger.log_event(
                "bot", "credentials_empty", level=logging.WARNING, path=path
            )
        return self.credentials

    async def connect(self) -> bool:
        return await self.connection.connect()

    async def join_channel(self) -> None:
        if self.credentials is None:
            raise RuntimeError("join_channel() called before read_credentials()")
        await self.connection.join(self.credentials.password)

    async def handle_chat(self) -> None:
        await self.read_loop.run()

    async def say(self, message: str) -> None:
        """Send ``message`` to the channel.

        Raises:
            ValidationError: If ``message`` is empty; nothing is written.
            WriteError: If the connection is closed or the write fails.
        """
        if not message:
            raise ValidationError("BasicBot.say: message was empty")
        await self.connection.send_line(build_privmsg(self.config.channel, message))
        logger.log_event(
            "command",
            "say",
            level=logging.DEBUG,
            channel=self.config.channel,
            message=message,
        )

    async def disconnect(self) -> None:
        await self.connection.disconnect()

    async def start(self) -> None:
        await self.supervisor.run()
