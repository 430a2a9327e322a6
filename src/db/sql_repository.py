"""GameRepository backed by the `games` table (SQLAlchemy session per request)"""

from dataclasses import replace
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.core.shared_types import Mark, Status
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_fields(replace(game, id=new_id), game_db)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored snapshot of a game with `game`."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_fields(game, game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Delete the row and hand back its last snapshot."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_fields(self, game: GameModel, game_db: DBGame) -> None:
        """The id is never overwritten: it belongs to the record."""
        game_db.board = list(game.board)
        game_db.size = game.size
        game_db.current_player = str(game.current_player)
        game_db.winner = game.winner
        game_db.status = str(game.status)
        game_db.last_move = game.last_move
        game_db.history = list(game.history)
        game_db.rematch_requested = (
            str(game.rematch_requested) if game.rematch_requested else None
        )
        game_db.rematch_accepted = game.rematch_accepted

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            id=game_db.id,
            board=tuple(game_db.board),
            size=game_db.size,
            current_player=Mark(game_db.current_player),
            winner=game_db.winner,
            status=Status(game_db.status),
            last_move=game_db.last_move,
            rematch_requested=(
                Mark(game_db.rematch_requested) if game_db.rematch_requested else None
            ),
            rematch_accepted=game_db.rematch_accepted,
            history=tuple(game_db.history or ()),
        )
