"""The Board is a flat, immutable sequence of N*N cells plus the geometry of its winning lines."""

from dataclasses import dataclass
from functools import cache
from math import isqrt
from typing import Iterable, Self

from src.core.exceptions import InvalidBoardError, UnsupportedSizeError
from src.core.shared_types import EMPTY, SUPPORTED_SIZES, Mark

Line = tuple[int, ...]
VALID_CELLS = {EMPTY, Mark.X.value, Mark.O.value}


def check_size(size: int) -> None:
    if size not in SUPPORTED_SIZES:
        raise UnsupportedSizeError(
            f"Board size {size} not supported. Pick one from {','.join(str(s) for s in SUPPORTED_SIZES)}."
        )


@cache
def lines_for(size: int) -> tuple[Line, ...]:
    """
    All 2N+2 winning lines of an N x N board, in a fixed order:
    rows (top to bottom), columns (left to right), main diagonal, anti-diagonal.
    """
    check_size(size)
    rows = [tuple(range(r * size, r * size + size)) for r in range(size)]
    columns = [tuple(c + k * size for k in range(size)) for c in range(size)]
    main_diagonal = tuple(i * (size + 1) for i in range(size))
    anti_diagonal = tuple((i + 1) * (size - 1) for i in range(size))
    return (*rows, *columns, main_diagonal, anti_diagonal)


def empty_board(size: int) -> "Board":
    return Board.empty(size)


def center(size: int) -> int:
    return (size * size) // 2


def corners(size: int) -> tuple[int, ...]:
    return (0, size - 1, size * (size - 1), size * size - 1)


@dataclass(frozen=True)
class Board:
    cells: tuple[str, ...]
    size: int

    @classmethod
    def empty(cls, size: int) -> Self:
        check_size(size)
        return cls(tuple(EMPTY for _ in range(size * size)), size)

    @classmethod
    def from_cells(cls, cells: Iterable[str], size: int | None = None) -> Self:
        """Construct a board from a flat list of cells, validating length and contents.

        If no size is given, it is inferred from the number of cells (which then must be a perfect square).
        """
        cells = tuple(str(cell) for cell in cells)
        if size is None:
            size = isqrt(len(cells))
        check_size(size)
        if len(cells) != size * size:
            raise InvalidBoardError(
                f"Board of size {size} needs {size * size} cells, got {len(cells)}."
            )
        unknown = set(cells) - VALID_CELLS
        if unknown:
            raise InvalidBoardError(f"Unknown cell value(s): {sorted(unknown)!r}")
        return cls(cells, size)

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, position: int) -> str:
        return self.cells[position]

    def row_col(self, position: int) -> tuple[int, int]:
        return divmod(position, self.size)

    def in_bounds(self, position: int) -> bool:
        return 0 <= position < len(self.cells)

    def is_vacant(self, position: int) -> bool:
        return self.in_bounds(position) and self.cells[position] == EMPTY

    def empty_cells(self) -> list[int]:
        return [index for index, cell in enumerate(self.cells) if cell == EMPTY]

    def is_empty(self) -> bool:
        return all(cell == EMPTY for cell in self.cells)

    def is_full(self) -> bool:
        return all(cell != EMPTY for cell in self.cells)

    def place(self, position: int, mark: Mark) -> "Board":
        """New board with the mark written at `position`. The current board is left untouched."""
        if not self.is_vacant(position):
            raise InvalidBoardError(f"Cannot place {mark} on position {position}.")
        cells = list(self.cells)
        cells[position] = mark.value
        return Board(tuple(cells), self.size)

    def render(self) -> str:
        """Human readable grid, one row per line, `_` for an empty cell."""
        return "\n".join(
            " ".join(cell or "_" for cell in self.cells[r * self.size : (r + 1) * self.size])
            for r in range(self.size)
        )

    def render_positions(self) -> str:
        """Grid of 0-indexed position numbers, read left-to-right, top-to-bottom."""
        width = len(str(len(self.cells) - 1))
        rows = [
            " | ".join(
                str(index).rjust(width)
                for index in range(r * self.size, (r + 1) * self.size)
            )
            for r in range(self.size)
        ]
        separator = "-" * len(rows[0])
        return f"\n{separator}\n".join(rows)
