"""
Type definitions used across layers
"""

from enum import StrEnum

# Boards outside this range are a caller contract breach, not a game-play event
SUPPORTED_SIZES = (3, 4, 5)

# An empty cell is stored as the empty string (that is also how the board column is persisted)
EMPTY = ""
DRAW = "draw"


class Mark(StrEnum):
    X = "X"
    O = "O"  # noqa: E741

    @property
    def opponent(self) -> "Mark":
        return Mark.O if self == Mark.X else Mark.X


class Status(StrEnum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"
    DECLINED = "declined"


class Outcome(StrEnum):
    X_WINS = "X wins"
    O_WINS = "O wins"
    DRAW = "draw"
    ONGOING = "ongoing"

    @property
    def winner(self) -> str | None:
        """Value stored in the `winner` field of a game: a mark, 'draw', or None while ongoing."""
        return {
            Outcome.X_WINS: Mark.X.value,
            Outcome.O_WINS: Mark.O.value,
            Outcome.DRAW: DRAW,
        }.get(self)
