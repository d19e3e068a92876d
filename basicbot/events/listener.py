"""Optional event-socket listener.

Experimental side channel: it only connects to a websocket and logs the frames
it receives. It never touches the chat connection and does not reconnect.
"""

from __future__ import annotations

import logging
from typing import Protocol

import websockets
from websockets.exceptions import WebSocketException

from ..logs.logger import logger


class EventListener(Protocol):
    async def run(self) -> None: ...

    async def stop(self) -> None: ...


class EventSocketListener:
    def __init__(self, url: str) -> None:
        self.url = url
        self.ws = None

    async def run(self) -> None:
        logger.log_event("events", "listener_start", url=self.url)
        try:
            async with websockets.connect(self.url) as ws:
                self.ws = ws
                logger.log_event("events", "listener_connected", url=self.url)
                async for message in ws:
                    if isinstance(message, bytes):
                        message = message.decode("utf-8", errors="replace")
                    logger.log_event(
                        "events", "listener_message", level=logging.DEBUG, message=message
                    )
        except (OSError, WebSocketException) as e:
            logger.log_event(
                "events", "listener_error", level=logging.WARNING, error=str(e)
            )
        finally:
            self.ws = None
            logger.log_event("events", "listener_closed", level=logging.DEBUG)

    async def stop(self) -> None:
        ws = self.ws
        if ws is not None:
            await ws.close()
        logger.log_event("events", "listener_stopped", level=logging.DEBUG)
