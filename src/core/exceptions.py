"""
Exceptions shared by all layers.

Only contract breaches travel as exceptions. A rejected move or a failing reasoning service resolves to a value.
"""


class GameError(Exception):
    """Base class for errors raised by the game domain."""


class GameStateError(GameError):
    """The game (snapshot) is in a state that does not allow the requested operation."""


class InvalidBoardError(GameError):
    """Board contents violate the board invariants (length, cell values)."""


class UnsupportedSizeError(GameError):
    """Requested board size is outside the supported range."""


class RepositoryError(Exception):
    """Record could not be found / stored."""


class InvalidRequestError(Exception):
    """Incoming request data could not be interpreted."""


class ReasoningServiceError(Exception):
    """The remote reasoning service failed to produce a usable answer."""
