"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameModel
from src.core.shared_types import Mark, Status
from src.db.schema import Base
from tests.boards import StateFactory, parse_board

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def game_state() -> StateFactory:
    """Call the inner function with a board layout (see `parse_board`) and the player to move."""

    def _create_state(
        layout: str,
        to_move: Mark = Mark.O,
        status: Status | None = None,
        winner: str | None = None,
    ) -> GameModel:
        board = parse_board(layout)
        size = int(len(board) ** 0.5)
        if status is None:
            status = Status.WAITING if all(cell == "" for cell in board) else Status.PLAYING
        return GameModel(
            id=None,
            board=board,
            size=size,
            current_player=to_move,
            winner=winner,
            status=status,
        )

    return _create_state
