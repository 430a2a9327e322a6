"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use the model defined here to send to/receive from the Service.
A GameModel is a snapshot: it is never mutated in place, every transition returns a new one (see `dataclasses.replace`).
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.core.shared_types import EMPTY, Mark, Status

# Type aliases to make GameModel easier to read
Cell = str
Winner = str


@dataclass(frozen=True)
class GameModel:
    """Transport-safe representation of a tic-tac-toe game used between API, Service, DB, and domain layers."""

    id: UUID | None
    board: tuple[Cell, ...]
    size: int
    current_player: Mark = Mark.X
    winner: Winner | None = None
    status: Status = Status.WAITING
    last_move: int = -1
    rematch_requested: Mark | None = None
    rematch_accepted: bool = False
    history: tuple[int, ...] = field(default=())

    @property
    def empty_positions(self) -> list[int]:
        return [index for index, cell in enumerate(self.board) if cell == EMPTY]
