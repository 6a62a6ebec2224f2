"""
Custom exceptions.

The rule core itself does not raise for any reachable game state: an illegal move is simply absent from the results.
These are raised while constructing boards, or by the session / service / API layers on top of the rules.
"""


class GameError(Exception):
    """Top level exception. Every layer raises a subclass of this one."""


class InvalidBoardError(GameError):
    """Pieces placed outside of the board, or two pieces placed on the same square."""


class SetupError(GameError):
    """The starting position could not be generated."""


class GameStateError(GameError):
    """The requested action does not fit the current state of the game (e.g. moving after checkmate)."""


class IllegalMoveError(GameError):
    """The requested move is not among the legal moves."""


class RepositoryError(GameError):
    """Game record could not be found / stored."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted. Raised from within pydantic validators (not a ValueError, so it propagates as-is)."""
