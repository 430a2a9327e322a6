"""Unit tests for src/db/sql_repository.py"""

from dataclasses import replace
from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.shared_types import Mark, Status
from src.db.database import init_db
from src.db.sql_repository import GameModel, SQLGameRepository
from src.tictactoe.rules import apply_move, new_game


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = new_game(None, 4)

    repo = SQLGameRepository(db_session_repo)
    record_in_db, game_id = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    # the repository hands out the id
    assert record_in_db.id == game_id
    assert record_in_db == replace(model, id=game_id)


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    model = GameModel(
        id=None,
        board=("X", "", "O", "", "X", "", "", "", ""),
        size=3,
        current_player=Mark.O,
        status=Status.PLAYING,
        last_move=4,
        history=(0, 2, 4),
    )

    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game
    assert isinstance(game_found.current_player, Mark)
    assert isinstance(game_found.status, Status)
    assert game_found.board == model.board


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    unknown_id = uuid4()
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(unknown_id) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(new_game(None))
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session) -> None:
    """Update an earlier created record."""
    repo = SQLGameRepository(db_session_repo)
    created, game_id = repo.create_game(new_game(None))

    after = apply_move(created, 4, Mark.X)
    assert after is not None
    updated_game = repo.update_game(game_id, after)
    assert updated_game is not None
    assert updated_game == after


def test_consecutive_game_updates(db_session_repo: Session) -> None:
    """Play a whole game, storing every snapshot."""
    repo = SQLGameRepository(db_session_repo)
    game, game_id = repo.create_game(new_game(None))

    for position in (0, 3, 1, 4, 2):
        game = apply_move(game, position, game.current_player)
        repo.update_game(game_id, game)

    after_all_updates = repo.get_game(game_id)
    assert after_all_updates is not None
    assert after_all_updates == game
    assert after_all_updates.winner == "X"
    assert after_all_updates.status == Status.FINISHED
    assert after_all_updates.history == (0, 3, 1, 4, 2)


def test_rematch_fields_are_stored(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    created, game_id = repo.create_game(new_game(None))
    with_request = replace(
        created,
        status=Status.FINISHED,
        winner="draw",
        rematch_requested=Mark.O,
        rematch_accepted=True,
    )
    repo.update_game(game_id, with_request)
    stored = repo.get_game(game_id)
    assert stored is not None
    assert stored.rematch_requested == Mark.O
    assert stored.rematch_accepted is True
    assert stored.winner == "draw"


def test_update_never_changes_the_id(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    created, game_id = repo.create_game(new_game(None))
    updated = repo.update_game(game_id, replace(created, id=uuid4()))
    assert updated is not None
    assert updated.id == game_id


def test_attempt_updating_unknown_game(db_session_repo: Session) -> None:
    """the update_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), new_game(None)) is None


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(new_game(None, 5))
    deleted_game = repo.delete_game(game_id)

    # the correct game should be deleted
    assert deleted_game == created_game

    # The game should no longer be available in db
    assert repo.get_game(game_id) is None


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    """the delete_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.delete_game(uuid4()) is None


def test_init_db_is_idempotent(db_session_repo: Session) -> None:
    """Setting up the tables a second time leaves existing records alone."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(new_game(None))
    init_db(db_session_repo.get_bind())
    init_db(db_session_repo.get_bind())
    assert repo.get_game(game_id) is not None
