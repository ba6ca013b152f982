"""Custom exception hierarchy for commandbot."""


class CommandBotError(Exception):
    """Base error type."""


class InvalidCommand(CommandBotError):
    """Raised when a command is registered without a usable syntax or callback."""
    pass


class DuplicateCommand(CommandBotError):
    """Raised when a command name is already registered."""
    pass


class ConfigError(CommandBotError):
    pass


class SlackError(CommandBotError):
    pass
