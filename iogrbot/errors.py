"""Exceptions raised by the bot core and its collaborators."""


class BotError(Exception):
    """Base class for all bot errors."""


class InvalidFormat(BotError, ValueError):
    """A submitted time is not of the form hh:mm:ss."""


class DuplicateWithoutOverwrite(BotError):
    """The participant already has a time and did not ask to overwrite it."""


class CorruptState(BotError):
    """The persisted leaderboard exists but cannot be read back."""

    def __init__(self, path, line_num, reason):
        self.path = path
        self.line_num = line_num
        self.reason = reason
        super().__init__(f"{path}:{line_num}: {reason}")


class PersistFailure(BotError):
    """Writing the leaderboard to disk failed."""


class FetchError(BotError):
    """Getting a new seed permalink failed."""


class ConfigError(BotError):
    """The bot configuration is missing or invalid."""
