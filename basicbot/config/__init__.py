"""Configuration package exports."""

from .core import get_configuration, print_config_summary  # noqa: F401
from .credentials import CredentialProvider, FileCredentialProvider  # noqa: F401
from .model import BotConfig, Credentials  # noqa: F401

__all__ = [
    "BotConfig",
    "Credentials",
    "CredentialProvider",
    "FileCredentialProvider",
    "get_configuration",
    "print_config_summary",
]
