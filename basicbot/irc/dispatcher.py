"""Owner command dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import REPEAT_COMMAND, SHUTDOWN_COMMAND
from ..logs.logger import logger
from .models import DispatchOutcome
from .parser import Command

if TYPE_CHECKING:  # pragma: no cover
    from ..bot.core import BasicBot


class CommandDispatcher:
    """Runs chat commands issued by the channel owner.

    Commands from anyone else are parsed upstream but never executed here.
    """

    def __init__(self, bot: BasicBot):
        self.bot = bot

    def is_owner(self, author: str) -> bool:
        return author == self.bot.config.channel

    async def dispatch(self, command: Command, author: str) -> DispatchOutcome:
        if not self.is_owner(author):
            logger.log_event(
                "command",
                "ignored",
                level=logging.DEBUG,
                command=command.name,
                author=author,
            )
            return DispatchOutcome.CONTINUE

        if command.name == SHUTDOWN_COMMAND:
            logger.log_event("command", "shutdown")
            await self.bot.disconnect()
            return DispatchOutcome.SHUTDOWN

        if command.name == REPEAT_COMMAND:
            # Echoes the command name; the argument is not used yet.
            await self.bot.say(command.name)
            return DispatchOutcome.CONTINUE

        logger.log_event("command", "received", command=command.name, arg=command.arg)
        return DispatchOutcome.CONTINUE
