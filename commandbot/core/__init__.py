"""Core domain logic for commandbot."""

from .bot import Bot
from .config import BotConfig, load_config
from .errors import (
    CommandBotError,
    ConfigError,
    DuplicateCommand,
    InvalidCommand,
    SlackError,
)
from .models import CommandAlias, InboundMessage, Presence

__all__ = [
    "Bot",
    "BotConfig",
    "load_config",
    "CommandAlias",
    "InboundMessage",
    "Presence",
    "CommandBotError",
    "ConfigError",
    "DuplicateCommand",
    "InvalidCommand",
    "SlackError",
]
