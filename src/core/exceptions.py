"""
Custom exceptions shared by all layers.

Every exception derives from GameError, so the (future) HTTP layer can catch a single type and translate it into a user-facing message.
None of these are transient: the triggering input should be rejected, not retried (the one exception being ConcurrencyConflictError, see below).
"""


class GameError(Exception):
    """Top-level exception for anything raised by this application."""


# --- ENGINE ---
class OutOfRangeError(GameError):
    """A position (or row/column) lies outside of the board."""


class InvalidMoveError(GameError):
    """The move breaks the rules: occupied square, wrong turn, or a move after the game ended."""


class GameAlreadyCompleteError(GameError):
    """A move was attempted on a game that has a winner or ended in a draw."""


# --- SERVICE / API ---
class GameStateError(GameError):
    """The request does not fit the current state of the game (full game, unknown player, ...)."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Something went wrong while reading or writing a game record."""


class GameNotFoundError(RepositoryError):
    """No game stored under the requested ID."""


class ConcurrencyConflictError(RepositoryError):
    """
    The stored record changed since it was read.

    NOTE the only error worth a retry: re-read the game, re-apply the move, write again.
    """
