"""
Tests for the chat read loop
"""

import logging
import time
from unittest.mock import AsyncMock, Mock, patch

import pytest

from basicbot.bot.core import BasicBot
from basicbot.errors import ChatReadError, WriteError
from basicbot.irc.models import DispatchOutcome
from basicbot.irc.parser import Command
from tests.fixtures.bot_fixtures import (
    OWNER,
    chat_line,
    make_config,
    make_reader,
    make_writer,
    written_lines,
)


async def connected_bot(*lines, config=None, writer=None, eof=True):
    bot = BasicBot(config or make_config(), credential_provider=Mock())
    reader = make_reader(*lines, eof=eof)
    writer = writer or make_writer()
    with patch("asyncio.open_connection", new=AsyncMock(return_value=(reader, writer))):
        assert await bot.connect() is True
    return bot, writer


class TestChatReadLoop:
    @pytest.mark.asyncio
    async def test_read_failure_disconnects_and_raises(self):
        bot, writer = await connected_bot()

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        writer.close.assert_called_once()
        assert bot.connection.connected is False

    @pytest.mark.asyncio
    async def test_keepalive_gets_exact_reply_and_skips_dispatch(self):
        bot, writer = await connected_bot("PING :tmi.twitch.tv")
        bot.dispatcher.dispatch = AsyncMock()

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        assert written_lines(writer) == ["PONG :tmi.twitch.tv\r\n"]
        bot.dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_keepalive_skips_throttle(self):
        bot, _ = await connected_bot(
            "PING :tmi.twitch.tv", config=make_config(msg_rate=5)
        )

        with patch("asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(ChatReadError):
                await bot.handle_chat()

        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_configured_keepalive_pair(self):
        config = make_config(
            keepalive_probe="PING :irc.example.test",
            keepalive_reply="PONG :irc.example.test",
        )
        bot, writer = await connected_bot("PING :irc.example.test", config=config)

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        assert written_lines(writer) == ["PONG :irc.example.test\r\n"]

    @pytest.mark.asyncio
    async def test_keepalive_write_failure_disconnects_and_raises(self):
        writer = make_writer()
        writer.drain = AsyncMock(side_effect=BrokenPipeError("broken pipe"))
        bot, _ = await connected_bot("PING :tmi.twitch.tv", writer=writer, eof=False)

        with pytest.raises(WriteError):
            await bot.handle_chat()

        assert bot.connection.connected is False

    @pytest.mark.asyncio
    async def test_chat_message_is_logged_and_dispatched(self, caplog):
        caplog.set_level(logging.INFO, logger="basicbot")
        bot, _ = await connected_bot(chat_line("alice", "!hello world"))
        bot.dispatcher.dispatch = AsyncMock(return_value=DispatchOutcome.CONTINUE)

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        bot.dispatcher.dispatch.assert_awaited_once_with(
            Command(name="hello", arg="world"), "alice"
        )
        assert chat_line("alice", "!hello world") in caplog.text
        assert "alice: !hello world" in caplog.text

    @pytest.mark.asyncio
    async def test_plain_chat_message_is_not_dispatched(self):
        bot, _ = await connected_bot(chat_line("alice", "just chatting"))
        bot.dispatcher.dispatch = AsyncMock()

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        bot.dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_unrecognized_lines_are_ignored(self):
        bot, writer = await connected_bot(
            ":tmi.twitch.tv 001 testbot :Welcome, GLHF!",
            ":testbot!testbot@testbot.tmi.twitch.tv JOIN #owner",
        )
        bot.dispatcher.dispatch = AsyncMock()

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        bot.dispatcher.dispatch.assert_not_called()
        writer.write.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_shutdown_returns_cleanly(self):
        bot, writer = await connected_bot(
            chat_line(OWNER, "!tbdown"), chat_line("alice", "still here"), eof=False
        )

        await bot.handle_chat()

        writer.close.assert_called_once()
        assert bot.connection.connected is False

    @pytest.mark.asyncio
    async def test_non_owner_shutdown_keeps_reading(self):
        bot, _ = await connected_bot(chat_line("alice", "!tbdown"))

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

    @pytest.mark.asyncio
    async def test_owner_repeat_writes_to_channel(self):
        bot, writer = await connected_bot(chat_line(OWNER, "!repeat hello there"))

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        assert written_lines(writer) == ["PRIVMSG #owner repeat\r\n"]

    @pytest.mark.asyncio
    async def test_auth_failure_notice_is_logged_and_reading_continues(self, caplog):
        caplog.set_level(logging.INFO, logger="basicbot")
        bot, writer = await connected_bot(
            ":tmi.twitch.tv NOTICE * :Login authentication failed",
            chat_line("alice", "still here"),
        )
        bot.dispatcher.dispatch = AsyncMock()

        with pytest.raises(ChatReadError):
            await bot.handle_chat()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert any("Login authentication failed" in r.getMessage() for r in errors)
        assert "alice: still here" in caplog.text
        writer.write.assert_not_called()
        writer.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_self_throttle_sleeps_after_each_processed_line(self):
        bot, _ = await connected_bot(
            chat_line("alice", "one"),
            "PING :tmi.twitch.tv",
            chat_line("bob", "two"),
            ":tmi.twitch.tv 001 testbot :Welcome, GLHF!",
            config=make_config(msg_rate=2.5),
        )

        with patch("asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(ChatReadError):
                await bot.handle_chat()

        assert sleep.await_count == 3
        sleep.assert_awaited_with(2.5)

    @pytest.mark.asyncio
    async def test_self_throttle_bounds_processing_rate(self):
        rate = 0.05
        lines = [chat_line("alice", f"message {i}") for i in range(4)]
        bot, _ = await connected_bot(*lines, config=make_config(msg_rate=rate))

        started = time.monotonic()
        with pytest.raises(ChatReadError):
            await bot.handle_chat()
        elapsed = time.monotonic() - started

        # Timing tolerant: four lines can never take less than ~four intervals.
        assert elapsed >= len(lines) * rate * 0.8
