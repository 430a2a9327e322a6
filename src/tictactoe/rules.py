"""
Move validation / application and the rematch transitions of a game.

Every function takes a GameModel snapshot and returns a new snapshot (or None if the request was rejected).
A rejection is an expected outcome (a stale client racing an update, a click on an occupied cell, ...), so it is not raised.
Only broken snapshots (wrong board length, unknown size, ...) raise.
"""

import logging
from dataclasses import replace
from uuid import UUID

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import Mark, Outcome, Status
from src.tictactoe.board import Board, check_size, empty_board
from src.tictactoe.evaluator import evaluate

logger = logging.getLogger(__name__)


def new_game(game_id: UUID | None, size: int = 3) -> GameModel:
    """The empty-game values: X to move, nobody has moved yet."""
    board = empty_board(size)
    return GameModel(id=game_id, board=board.cells, size=size)


def board_of(state: GameModel) -> Board:
    return Board.from_cells(state.board, state.size)


def validate_state(state: GameModel) -> Board:
    """Check the snapshot invariants and return its board. Raises if the snapshot could never have been produced by the rules."""
    check_size(state.size)
    board = board_of(state)
    if state.winner is not None and state.status not in (Status.FINISHED, Status.DECLINED):
        raise GameStateError(
            f"Game has a winner ({state.winner}) but status is {state.status!r}."
        )
    if state.current_player not in tuple(Mark):
        raise GameStateError(f"Unknown player to move: {state.current_player!r}")
    return board


def rejection_reason(state: GameModel, position: int, acting_player: str) -> str | None:
    """Why a move would be rejected, or None when it is legal."""
    board = validate_state(state)
    if not isinstance(position, int) or not board.in_bounds(position):
        return f"position {position!r} is off the board"
    if not board.is_vacant(position):
        return f"position {position} is already taken"
    if state.winner is not None:
        return "game has already been decided"
    if state.status == Status.FINISHED:
        return "game is finished"
    if state.status == Status.DECLINED:
        return "game has been closed"
    if acting_player != state.current_player:
        return f"it is {state.current_player}'s turn"
    return None


def is_legal_move(state: GameModel, position: int, acting_player: str) -> bool:
    return rejection_reason(state, position, acting_player) is None


def apply_move(state: GameModel, position: int, acting_player: str) -> GameModel | None:
    """
    Attempt a move.
    ----

    1. reject (return None) when off the board / occupied / game decided or closed / not your turn
    2. place the mark
    3. evaluate the board and record the winner (a mark or 'draw')
    4. hand the turn to the opponent if the game goes on
    5. update status and last move
    """
    reason = rejection_reason(state, position, acting_player)
    if reason is not None:
        logger.debug("Move %r by %s rejected: %s", position, acting_player, reason)
        return None

    mover = Mark(state.current_player)
    board = board_of(state).place(position, mover)
    outcome = evaluate(board)
    winner = outcome.winner

    return replace(
        state,
        board=board.cells,
        current_player=mover.opponent if outcome == Outcome.ONGOING else mover,
        winner=winner,
        status=Status.FINISHED if winner is not None else Status.PLAYING,
        last_move=position,
        history=(*state.history, position),
    )


# -- REMATCH SIGNALING --
def request_rematch(state: GameModel, player: str) -> GameModel | None:
    """Only a finished game can be replayed. Remember who asked."""
    if state.status != Status.FINISHED or player not in tuple(Mark):
        return None
    return replace(state, rematch_requested=Mark(player), rematch_accepted=False)


def accept_rematch(state: GameModel, player: str | None = None) -> GameModel | None:
    """
    Reset a finished game to the empty-game values, keeping its id and size.

    When a request is on record, only the other player can accept it.
    """
    if state.status != Status.FINISHED:
        return None
    if (
        player is not None
        and state.rematch_requested is not None
        and player == state.rematch_requested
    ):
        return None
    logger.info("Rematch accepted for game %s", state.id)
    return new_game(state.id, state.size)


def decline_rematch(state: GameModel, player: str | None = None) -> GameModel | None:
    """Close the game for good. Allowed while playing or once finished."""
    if state.status not in (Status.PLAYING, Status.FINISHED):
        return None
    if player is not None and player not in tuple(Mark):
        return None
    return replace(state, status=Status.DECLINED, rematch_accepted=False)
