"""
Main entry point for the basic Twitch bot
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence

from .bot import BasicBot
from .config import get_configuration, print_config_summary
from .errors import BotError, ConfigError, log_error
from .logs.logger import logger


async def main() -> None:
    config = get_configuration()
    logger.log_event("app", "starting", channel=config.channel, name=config.name)
    print_config_summary(config)
    bot = BasicBot(config)
    await bot.start()


def health_check() -> int:
    try:
        config = get_configuration()
    except ConfigError as e:
        logger.log_event(
            "app", "health_check_failed", level=logging.ERROR, error=str(e)
        )
        return 1
    logger.log_event("app", "health_check_ok", channel=config.channel)
    return 0


def run(argv: Sequence[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    if argv and argv[0] == "--health-check":
        return health_check()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
    except BotError as e:
        log_error("Bot stopped on a fatal error", e, level=logging.CRITICAL)
        return 1
    finally:
        logger.log_event("app", "shutdown_complete")
    return 0


if __name__ == "__main__":
    sys.exit(run())
