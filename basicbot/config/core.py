"""Build the bot configuration from the process environment.

This is the process wiring layer; the bot itself only ever sees a BotConfig.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import pydantic

from ..errors import ConfigError
from ..logs.logger import logger
from .model import BotConfig

# Environment variable -> BotConfig field
ENV_FIELDS = {
    "BOT_CHANNEL": "channel",
    "BOT_NAME": "name",
    "BOT_SERVER": "server",
    "BOT_PORT": "port",
    "BOT_MSG_RATE": "msg_rate",
    "BOT_PRIVATE_PATH": "private_path",
    "BOT_RECONNECT_DELAY": "reconnect_delay",
    "BOT_EVENT_SOCKET_URL": "event_socket_url",
}


def get_configuration(environ: Mapping[str, str] | None = None) -> BotConfig:
    """Load and validate the bot configuration.

    Args:
        environ: Mapping to read from, ``os.environ`` by default.

    Returns:
        A validated, frozen BotConfig.

    Raises:
        ConfigError: If a required variable is missing or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    raw: dict[str, Any] = {
        field: environ[var]
        for var, field in ENV_FIELDS.items()
        if environ.get(var, "").strip()
    }
    missing = [
        var for var in ("BOT_CHANNEL", "BOT_NAME") if ENV_FIELDS[var] not in raw
    ]
    if missing:
        raise ConfigError(
            f"Missing required environment variable(s): {', '.join(missing)}",
            data={"missing": missing},
        )
    try:
        return BotConfig(**raw)
    except pydantic.ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {details}") from e


def print_config_summary(config: BotConfig) -> None:
    logger.log_event(
        "app",
        "config_summary",
        level=logging.INFO,
        server=config.server,
        port=config.port,
        channel=config.channel,
        name=config.name,
        msg_rate=config.msg_rate,
        private_path=config.private_path,
    )
