"""Console logger for the bot.

Every record is written to stdout as ``[<timestamp>] <message>`` where the
timestamp reads like ``7 Mar 09:22:01``.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import TextIO

import colorlog

from .event_catalog import get_template

LOG_FORMAT = "%(log_color)s[%(asctime)s]%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def _supports_color(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except Exception:  # pragma: no cover
        return False


def _debug_enabled() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


def timestamp(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) as ``day month HH:MM:SS``."""
    moment = moment or datetime.now()
    return f"{moment.day} {moment:%b %H:%M:%S}"


class TimestampFormatter(colorlog.ColoredFormatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        return timestamp(datetime.fromtimestamp(record.created))


class BotLogger:
    def __init__(self, name: str = "basicbot", stream: TextIO | None = None) -> None:
        self.logger = logging.getLogger(name)
        self.logger.handlers.clear()
        self.logger.setLevel(logging.DEBUG if _debug_enabled() else logging.INFO)

        stream = stream or sys.stdout
        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(
            TimestampFormatter(
                LOG_FORMAT,
                log_colors=LOG_COLORS,
                no_color=not _supports_color(stream),
            )
        )
        self.logger.addHandler(console_handler)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        """Log a catalogued event.

        The message text is taken from ``human`` when given, otherwise from the
        ``(domain, action)`` template in the event catalog formatted with
        ``kwargs``. Unknown events fall back to ``"<domain>: <action>"``. In
        debug mode the context is appended as ``(key=value, ...)``.
        """
        text = human if human is not None else self._render(domain, action, kwargs)
        if _debug_enabled() and kwargs:
            context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
            text = f"{text} ({context})"
        self.logger.log(level, text, exc_info=exc_info)

    @staticmethod
    def _render(domain: str, action: str, kwargs: dict[str, object]) -> str:
        template = get_template(domain, action)
        if not template:
            return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template


logger = BotLogger()
