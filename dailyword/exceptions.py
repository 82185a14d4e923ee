"""
Game Exceptions

Error taxonomy shared by the services and the HTTP layer.
"""


class DailyWordError(Exception):
    """Base class for all game errors."""


class GameInputError(DailyWordError):
    """Recoverable error caused by player input, shown as a transient message."""

    default_message = "Invalid input"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class WrongLengthError(GameInputError):
    default_message = "Guess has the wrong number of letters"


class NotAWordError(GameInputError):
    default_message = "Not in word list"


class ValidationInProgressError(GameInputError):
    default_message = "Previous guess is still being checked"


class GameOverError(GameInputError):
    default_message = "Game is already over"


class SessionNotStartedError(GameInputError):
    default_message = "No game in progress"


class PracticeOnlyError(GameInputError):
    default_message = "Only practice games can be reset"


class GameInProgressError(GameInputError):
    default_message = "The answer is only revealed once the game is over"


class InvalidLengthError(DailyWordError, ValueError):
    """Secret and guess lengths differ. Programmer error."""


class ConfigurationError(DailyWordError):
    """Deployment is unusable (empty word list, bad settings)."""


class PersistenceCorruptionError(DailyWordError):
    """A persisted value could not be decoded. Always recovered locally."""
