"""Where game snapshots are kept between requests (SQL in production, a dictionary in the service tests)."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Storage of whole GameModel snapshots, keyed by game id.

    The rules never patch a record: every call hands over (or returns) a complete snapshot.
    """

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Latest stored snapshot, None for an unknown id."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a fresh game; the repository assigns the id and returns it with the stored snapshot."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored snapshot with `game` (board, turn, result, rematch fields). None for an unknown id."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the record and return its last snapshot, None for an unknown id."""
        ...
