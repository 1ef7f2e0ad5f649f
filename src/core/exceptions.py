"""
Custom exceptions, shared by all layers.

Everything derives from GameError, so the service (and whatever sits above it) can catch one type.
"""


class GameError(Exception):
    """Base class for all errors raised by the trivia game."""


# --- DOMAIN ---
class GameStateError(GameError):
    """The game is not in a state that allows the requested operation."""


class InvalidTransitionError(GameStateError):
    """Session operation called from a status that does not permit it."""


class InvalidGuessError(GameError):
    """Guess data outside of the accepted range (e.g. latitude > 90)."""


class InvalidSettingsError(GameError):
    """Settings value that cannot be played with (e.g. a timer of 0 minutes)."""


class InvalidEventError(GameError):
    """A historical event record could not be converted."""


class NotEnoughEventsError(GameError):
    """The event pool cannot fill a full game."""


# --- SERVICE / PERSISTENCE ---
class RepositoryError(GameError):
    pass


class SessionNotFoundError(RepositoryError):
    pass


# --- API ---
# NOTE: not a ValueError on purpose. Pydantic wraps ValueErrors raised in validators, other exceptions propagate as they are.
class InvalidRequestError(GameError):
    pass
