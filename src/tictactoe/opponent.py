"""
Local (heuristic) computer opponent.

The opponent plays the mark that is to move. It goes through a fixed priority list and stops at the first tier that has an answer:

1. empty board   -> center
2. immediate win -> first cell that completes a line for itself
3. block         -> first cell that would complete a line for the human
4. corners       -> random free corner
5. anything      -> random free cell

Tiers 2 and 3 make sure a forced win / loss is never missed. Tiers 4 and 5 are random on purpose so play is not fully predictable.
"""

import random
from enum import StrEnum

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import Mark
from src.tictactoe.board import Board, center, corners
from src.tictactoe.evaluator import wins_with
from src.tictactoe.rules import board_of


class Tier(StrEnum):
    CENTER = "center"
    WIN = "win"
    BLOCK = "block"
    CORNER = "corner"
    ANY = "any"


def _first_winning_cell(board: Board, mark: Mark) -> int | None:
    return next(
        (position for position in board.empty_cells() if wins_with(board, position, mark)),
        None,
    )


def fallback_candidates(state: GameModel) -> tuple[Tier, tuple[int, ...]]:
    """
    The tier that decides the move and the positions it may pick from.
    Deterministic tiers yield a single candidate; the random tiers yield all positions the random source chooses between.
    """
    if state.winner is not None:
        raise GameStateError(f"Game is already decided: {state.winner}")
    board = board_of(state)
    empty = board.empty_cells()
    if not empty:
        raise GameStateError("No empty cell left to play.")

    if board.is_empty():
        return Tier.CENTER, (center(board.size),)

    own = Mark(state.current_player)
    winning_cell = _first_winning_cell(board, own)
    if winning_cell is not None:
        return Tier.WIN, (winning_cell,)

    blocking_cell = _first_winning_cell(board, own.opponent)
    if blocking_cell is not None:
        return Tier.BLOCK, (blocking_cell,)

    free_corners = tuple(c for c in corners(board.size) if board.is_vacant(c))
    if free_corners:
        return Tier.CORNER, free_corners

    return Tier.ANY, tuple(empty)


def choose_fallback_move(state: GameModel, rng: random.Random | None = None) -> int:
    """Pick a position for the player to move. Caller guarantees the game is undecided and has a free cell."""
    _, candidates = fallback_candidates(state)
    if len(candidates) == 1:
        return candidates[0]
    return (rng or random).choice(candidates)
