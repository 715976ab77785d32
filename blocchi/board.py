"""The playing field: occupied cells plus the falling and upcoming pieces."""

from __future__ import annotations

import random

from .consts import NUMBER_OF_CELLS, NUMBER_OF_COLUMNS, NUMBER_OF_ROWS
from .tetromino import (
    MoveDirection,
    TetrominoProvider,
    TetrominoType,
    cell_from_row_and_column,
    row_and_column_from_cell,
)


class BoardNotInitializedError(RuntimeError):
    """Raised when the board is used before its piece provider exists."""

    def __init__(self) -> None:
        super().__init__("Provider has not been initialized.")


def _row_cells(row: int) -> range:
    start = cell_from_row_and_column(row, 0)
    return range(start, start + NUMBER_OF_COLUMNS)


class GameBoard:
    """Grid of settled cells together with the piece provider."""

    def __init__(self) -> None:
        self.grid: list[int] = [0] * NUMBER_OF_CELLS
        self.provider: TetrominoProvider | None = None

    def _require_provider(self) -> TetrominoProvider:
        if self.provider is None:
            raise BoardNotInitializedError()
        return self.provider

    def init(self, rng: random.Random) -> None:
        """Create the piece provider unless it already exists."""
        if self.provider is None:
            self.provider = TetrominoProvider(rng)

    def next_tetromino(self, rng: random.Random) -> bool:
        """Bring in the upcoming piece; return whether it has room to spawn."""
        return self._require_provider().advance(rng, self.grid)

    def reset(self, rng: random.Random) -> None:
        """Empty the grid and draw two fresh pieces."""
        provider = self._require_provider()
        self.grid = [0] * NUMBER_OF_CELLS
        provider.advance(rng, self.grid)
        provider.advance(rng, self.grid)

    def current_type(self) -> TetrominoType:
        """Shape of the falling piece."""
        return self._require_provider().current.kind

    def upcoming_type(self) -> TetrominoType:
        """Shape of the piece that comes next."""
        return self._require_provider().upcoming.kind

    def current_cells(self) -> tuple[int, ...]:
        """Cells covered by the falling piece."""
        return self._require_provider().current.cells()

    def upcoming_cells(self) -> tuple[int, ...]:
        """Cells the upcoming piece will cover when it spawns."""
        return self._require_provider().upcoming.cells()

    def drop_down(self) -> tuple[int, ...] | None:
        """Move the falling piece one row down.

        Returns None when it moved. When it cannot move, its cells are marked
        as occupied and returned.
        """
        landed = self._require_provider().current.drop_down(self.grid)
        if landed is not None:
            for cell in landed:
                self.grid[cell] = 1
        return landed

    def is_cell_occupied(self, cell: int) -> bool:
        """Whether a settled block sits in ``cell``."""
        return self.grid[cell] != 0

    def move_tetromino(self, direction: MoveDirection) -> bool:
        """Shift the falling piece sideways; return whether it moved."""
        return self._require_provider().current.shift(direction, self.grid)

    def rotate_tetromino(self) -> bool:
        """Rotate the falling piece; return whether it rotated."""
        return self._require_provider().current.rotate(self.grid)

    def _is_row_filled(self, row: int) -> bool:
        return all(self.grid[cell] for cell in _row_cells(row))

    def next_cell_from_filled_row_after(self, cell: int | None) -> int | None:
        """Next cell, walking filled rows bottom-up and left to right.

        With ``cell`` None the walk starts at the bottom row. Returns None
        once no filled row is left after ``cell``.
        """
        if cell is None:
            max_row, max_col, increment = NUMBER_OF_ROWS - 1, 0, False
        else:
            max_row, max_col = row_and_column_from_cell(cell)
            increment = True

        for row in range(max_row, -1, -1):
            if not self._is_row_filled(row):
                continue
            if max_col < NUMBER_OF_COLUMNS - 1:
                return cell_from_row_and_column(row, max_col + int(increment))
            # At the end of a row: carry on from the start of the next one.
            max_col = 0
            increment = False
        return None

    def filled_row_count(self) -> int:
        """Number of rows with every cell occupied."""
        return sum(1 for row in range(NUMBER_OF_ROWS) if self._is_row_filled(row))

    def collapse_filled_rows(self) -> None:
        """Remove filled rows, letting the rows above fall into place."""
        width = NUMBER_OF_COLUMNS
        for row in range(NUMBER_OF_ROWS - 1, -1, -1):
            while self._is_row_filled(row):
                if row > 0:
                    self.grid[width:(row + 1) * width] = self.grid[0:row * width]
                self.grid[0:width] = [0] * width