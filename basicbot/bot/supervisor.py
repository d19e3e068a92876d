"""Top-level retry policy for the bot session."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_never,
    wait_fixed,
)

from ..errors import BotError, CredentialError, DialError, TransientError, log_error
from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from ..events import EventListener
    from .core import BasicBot


class Supervisor:
    """Runs connect -> join -> read until a clean shutdown.

    Credentials are read once up front; failing that aborts without touching
    the network. Every TransientError restarts the whole cycle after
    ``reconnect_delay`` seconds, with no limit on the number of attempts.
    Anything else ends ``run`` with the original exception.
    """

    def __init__(
        self, bot: BasicBot, event_listener: EventListener | None = None
    ) -> None:
        self.bot = bot
        self.event_listener = event_listener
        self.attempts = 0
        self._last_error: BaseException | None = None

    async def run(self) -> None:
        try:
            self.bot.read_credentials()
        except CredentialError as e:
            log_error("Cannot load credentials", e)
            logger.log_event("bot", "aborting", level=logging.ERROR)
            raise

        listener_task = self._start_event_listener()
        try:
            await self._run_sessions()
        finally:
            await self._stop_event_listener(listener_task)
        logger.log_event("bot", "stopped")

    async def _run_sessions(self) -> None:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(TransientError),
            wait=wait_fixed(self.bot.config.reconnect_delay),
            stop=stop_never,
            before=self._log_restart,
            before_sleep=self._remember_failure,
            sleep=asyncio.sleep,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self._run_session(attempt.retry_state.attempt_number)
        except (BotError, RuntimeError) as e:
            logger.log_event("bot", "fatal", level=logging.ERROR, error=str(e))
            raise

    async def _run_session(self, attempt: int) -> None:
        self.attempts = attempt
        logger.log_event("bot", "session_start", level=logging.DEBUG, attempt=attempt)
        config = self.bot.config
        if not await self.bot.connect():
            raise DialError(
                f"Cannot connect to {config.server}:{config.port}",
                data={"server": config.server, "port": config.port},
            )
        try:
            await self.bot.join_channel()
        except TransientError:
            await self.bot.disconnect()
            raise
        await self.bot.handle_chat()

    def _remember_failure(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        self._last_error = outcome.exception() if outcome else None

    def _log_restart(self, retry_state: RetryCallState) -> None:
        # Runs before every attempt, after the backoff has elapsed.
        if retry_state.attempt_number == 1:
            return
        error = self._last_error
        logger.log_event(
            "bot",
            "restart",
            level=logging.WARNING,
            error=str(error) if error else "session ended",
            delay=self.bot.config.reconnect_delay,
            attempt=retry_state.attempt_number,
        )

    def _start_event_listener(self) -> asyncio.Task[None] | None:
        if self.event_listener is None:
            return None
        return asyncio.create_task(self.event_listener.run())

    async def _stop_event_listener(self, task: asyncio.Task[None] | None) -> None:
        if task is None or self.event_listener is None:
            return
        await self.event_listener.stop()
        if not task.done():
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
