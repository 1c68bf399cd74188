"""
Custom exceptions

Everything derives from GameError, so upper layers can catch a single top-level exception.

NOTE: none of these subclass ValueError on purpose. Pydantic wraps a ValueError raised in a validator into a ValidationError,
while any other exception propagates as is.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game."""


# --- DOMAIN ---
class InvalidFENError(GameError):
    """String cannot be interpreted as a FEN piece placement."""


class DecodeError(GameError):
    """Persisted payload (board, history, timers) does not have the expected structure."""


class GameStateError(GameError):
    """Requested action is not allowed in the current state of the game (ex. game is already over)."""


class IllegalMoveError(GameError):
    """Move is not part of the legal move set."""


class NotYourTurnError(GameError):
    """Player tried to move while waiting for the opponent."""


# --- BOUNDARY ---
class InvalidRequestError(GameError):
    """Request data cannot be interpreted."""


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Record could not be found / stored."""


class RoomExistsError(RepositoryError):
    """Cannot create a room with an id that is already taken."""
