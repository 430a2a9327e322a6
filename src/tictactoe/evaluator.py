"""Win / draw detection over a board snapshot."""

from src.core.shared_types import EMPTY, Mark, Outcome
from src.tictactoe.board import Board, Line, lines_for

MARK_TO_OUTCOME: dict[str, Outcome] = {
    Mark.X.value: Outcome.X_WINS,
    Mark.O.value: Outcome.O_WINS,
}


def winning_line(board: Board) -> Line | None:
    """First completed line (rows, then columns, then diagonals), if any."""
    for line in lines_for(board.size):
        first = board.cells[line[0]]
        if first != EMPTY and all(board.cells[index] == first for index in line):
            return line
    return None


def evaluate(board: Board) -> Outcome:
    line = winning_line(board)
    if line is not None:
        return MARK_TO_OUTCOME[board.cells[line[0]]]
    if board.is_full():
        return Outcome.DRAW
    return Outcome.ONGOING


def wins_with(board: Board, position: int, mark: Mark) -> bool:
    """Would placing `mark` on the (empty) `position` complete a line for it?"""
    return evaluate(board.place(position, mark)) == MARK_TO_OUTCOME[mark.value]
