"""
Tests for the optional event-socket listener
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from websockets.exceptions import InvalidURI

from basicbot.events import EventSocketListener


class FakeWebSocket:
    def __init__(self, frames):
        self.frames = list(frames)
        self.close = AsyncMock()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self.frames:
            raise StopAsyncIteration
        return self.frames.pop(0)


class TestEventSocketListener:
    def setup_method(self):
        self.listener = EventSocketListener("ws://events.example.test/ws")

    @pytest.mark.asyncio
    async def test_run_logs_frames_until_closed(self, caplog):
        caplog.set_level(logging.DEBUG, logger="basicbot")
        ws = FakeWebSocket(['{"type": "hello"}', b"binary frame"])

        with patch("websockets.connect", return_value=ws) as connect:
            await self.listener.run()

        connect.assert_called_once_with("ws://events.example.test/ws")
        assert '{"type": "hello"}' in caplog.text
        assert "binary frame" in caplog.text
        assert "Event socket closed" in caplog.text
        assert self.listener.ws is None

    @pytest.mark.asyncio
    async def test_connection_errors_end_run_quietly(self, caplog):
        caplog.set_level(logging.INFO, logger="basicbot")

        with patch("websockets.connect", side_effect=ConnectionRefusedError("refused")):
            await self.listener.run()

        assert "Event socket error: refused" in caplog.text

    @pytest.mark.asyncio
    async def test_invalid_url_is_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="basicbot")

        with patch(
            "websockets.connect", side_effect=InvalidURI("nope", "not a websocket URI")
        ):
            await self.listener.run()

        assert "Event socket error" in caplog.text

    @pytest.mark.asyncio
    async def test_stop_closes_open_socket(self):
        ws = FakeWebSocket([])
        self.listener.ws = ws

        await self.listener.stop()

        ws.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_without_socket_is_safe(self):
        await self.listener.stop()
