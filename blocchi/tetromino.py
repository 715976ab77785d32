"""Tetromino shapes, their movement rules and the piece provider."""

from __future__ import annotations

import dataclasses
import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .consts import NUMBER_OF_COLUMNS, NUMBER_OF_ROWS

Board = Sequence[int]
Position = tuple[int, int]


class Rotation(Enum):
    """Clockwise rotation of a piece."""

    ZERO = "0°"
    HALF_PI = "90°"
    PI = "180°"
    THREE_HALF_PI = "270°"

    def __str__(self) -> str:
        return self.value


class MoveDirection(Enum):
    """Horizontal direction of a shift."""

    RIGHT = "right"
    LEFT = "left"


def _unsupported(kind: TetrominoType, rotation: Rotation) -> ValueError:
    return ValueError(f"Type '{kind}' does not support rotation '{rotation}'!")


class TetrominoType(Enum):
    """The seven tetromino shapes."""

    I = "I"  # noqa: E741
    O = "O"  # noqa: E741
    T = "T"
    J = "J"
    L = "L"
    S = "S"
    Z = "Z"

    def __str__(self) -> str:
        return self.value

    def next_rotation(self, rotation: Rotation) -> Rotation:
        """Return the rotation that follows ``rotation`` for this shape."""
        try:
            return _NEXT_ROTATION[self][rotation]
        except KeyError:
            raise _unsupported(self, rotation) from None

    def height(self, rotation: Rotation) -> int:
        """Rows the piece occupies from its anchor row downwards."""
        heights = _HEIGHTS[self]
        if isinstance(heights, int):
            return heights
        try:
            return heights[rotation]
        except KeyError:
            raise _unsupported(self, rotation) from None

    def starting_column(self) -> int:
        """Column of the anchor cell when the piece spawns."""
        return _STARTING_COLUMNS[self]


_TWO_STATE = {Rotation.ZERO: Rotation.HALF_PI, Rotation.HALF_PI: Rotation.ZERO}
_FOUR_STATE = {
    Rotation.ZERO: Rotation.HALF_PI,
    Rotation.HALF_PI: Rotation.PI,
    Rotation.PI: Rotation.THREE_HALF_PI,
    Rotation.THREE_HALF_PI: Rotation.ZERO,
}

_NEXT_ROTATION: dict[TetrominoType, dict[Rotation, Rotation]] = {
    TetrominoType.I: _TWO_STATE,
    TetrominoType.O: {Rotation.ZERO: Rotation.ZERO},
    TetrominoType.T: _FOUR_STATE,
    TetrominoType.J: _FOUR_STATE,
    TetrominoType.L: _FOUR_STATE,
    TetrominoType.S: _TWO_STATE,
    TetrominoType.Z: _TWO_STATE,
}

_HEIGHTS: dict[TetrominoType, int | dict[Rotation, int]] = {
    TetrominoType.I: {Rotation.ZERO: 4, Rotation.HALF_PI: 1},
    TetrominoType.O: 2,
    TetrominoType.T: {
        Rotation.ZERO: 2,
        Rotation.HALF_PI: 2,
        Rotation.PI: 1,
        Rotation.THREE_HALF_PI: 2,
    },
    TetrominoType.J: {
        Rotation.ZERO: 3,
        Rotation.HALF_PI: 2,
        Rotation.PI: 1,
        Rotation.THREE_HALF_PI: 1,
    },
    TetrominoType.L: {
        Rotation.ZERO: 3,
        Rotation.HALF_PI: 1,
        Rotation.PI: 1,
        Rotation.THREE_HALF_PI: 2,
    },
    TetrominoType.S: 2,
    TetrominoType.Z: 2,
}

_STARTING_COLUMNS = {
    TetrominoType.I: 4,
    TetrominoType.O: 4,
    TetrominoType.T: 5,
    TetrominoType.J: 5,
    TetrominoType.L: 4,
    TetrominoType.S: 4,
    TetrominoType.Z: 5,
}

# (row offset, column offset) of each of the four cells from the anchor.
_OFFSETS: dict[tuple[TetrominoType, Rotation], tuple[Position, ...]] = {
    (TetrominoType.I, Rotation.ZERO): ((0, 0), (1, 0), (2, 0), (3, 0)),
    (TetrominoType.I, Rotation.HALF_PI): ((0, 0), (0, 1), (0, 2), (0, 3)),
    (TetrominoType.O, Rotation.ZERO): ((0, 0), (1, 0), (0, 1), (1, 1)),
    (TetrominoType.T, Rotation.ZERO): ((0, 0), (1, 0), (0, -1), (0, 1)),
    (TetrominoType.T, Rotation.HALF_PI): ((0, 0), (1, 0), (-1, 0), (0, 1)),
    (TetrominoType.T, Rotation.PI): ((0, 0), (-1, 0), (0, -1), (0, 1)),
    (TetrominoType.T, Rotation.THREE_HALF_PI): ((0, 0), (1, 0), (-1, 0), (0, -1)),
    (TetrominoType.J, Rotation.ZERO): ((0, 0), (1, 0), (2, 0), (2, -1)),
    (TetrominoType.J, Rotation.HALF_PI): ((0, 0), (0, 1), (0, 2), (1, 2)),
    (TetrominoType.J, Rotation.PI): ((0, 0), (-1, 0), (-2, 0), (-2, 1)),
    (TetrominoType.J, Rotation.THREE_HALF_PI): ((0, 0), (0, -1), (0, -2), (-1, -2)),
    (TetrominoType.L, Rotation.ZERO): ((0, 0), (1, 0), (2, 0), (2, 1)),
    (TetrominoType.L, Rotation.HALF_PI): ((0, 0), (0, 1), (0, 2), (-1, 2)),
    (TetrominoType.L, Rotation.PI): ((0, 0), (-1, 0), (-2, 0), (-2, -1)),
    (TetrominoType.L, Rotation.THREE_HALF_PI): ((0, 0), (0, -1), (0, -2), (1, -2)),
    (TetrominoType.S, Rotation.ZERO): ((0, 0), (1, 0), (0, 1), (1, -1)),
    (TetrominoType.S, Rotation.HALF_PI): ((0, 0), (-1, 0), (0, 1), (1, 1)),
    (TetrominoType.Z, Rotation.ZERO): ((0, 0), (1, 0), (0, -1), (1, 1)),
    (TetrominoType.Z, Rotation.HALF_PI): ((0, 0), (-1, 0), (0, -1), (1, -1)),
}

_TYPES = tuple(TetrominoType)


def random_type(rng: random.Random) -> TetrominoType:
    """Pick one of the seven shapes uniformly."""
    return _TYPES[rng.randrange(len(_TYPES))]


def cell_from_row_and_column(row: int, col: int) -> int:
    """Index of the board cell at ``row`` and ``col``."""
    return row * NUMBER_OF_COLUMNS + col


def row_and_column_from_cell(cell: int) -> tuple[int, int]:
    """Row and column of a board cell index."""
    return divmod(cell, NUMBER_OF_COLUMNS)


@dataclass
class Tetromino:
    """A piece of a given shape anchored at a row and column."""

    kind: TetrominoType
    row: int
    col: int
    rotation: Rotation = Rotation.ZERO

    def positions(self, row: int, col: int, rotation: Rotation) -> tuple[Position, ...]:
        """(row, column) of the four cells were the piece anchored as given."""
        key_rotation = Rotation.ZERO if self.kind is TetrominoType.O else rotation
        try:
            offsets = _OFFSETS[self.kind, key_rotation]
        except KeyError:
            raise _unsupported(self.kind, rotation) from None
        return tuple((row + dr, col + dc) for dr, dc in offsets)

    def cells(self) -> tuple[int, ...]:
        """Board cell indices the piece currently covers."""
        return _to_cells(self.positions(self.row, self.col, self.rotation))

    def fits(self, row: int, col: int, rotation: Rotation, board: Board) -> bool:
        """Whether the piece would lie within the board on free cells."""
        positions = self.positions(row, col, rotation)
        if any(
            not (0 <= r < NUMBER_OF_ROWS and 0 <= c < NUMBER_OF_COLUMNS)
            for r, c in positions
        ):
            return False
        return not any(board[cell] for cell in _to_cells(positions))

    def drop_down(self, board: Board) -> tuple[int, ...] | None:
        """Move one row down.

        Returns None when the piece moved, or the cells it rests on when it
        cannot move any further.
        """
        height = self.kind.height(self.rotation)
        if self.row + height == NUMBER_OF_ROWS:
            return self.cells()

        next_row = min(NUMBER_OF_ROWS - height, self.row + 1)
        targets = _to_cells(self.positions(next_row, self.col, self.rotation))
        if any(board[cell] for cell in targets):
            return self.cells()

        self.row = next_row
        return None

    def shift(self, direction: MoveDirection, board: Board) -> bool:
        """Move one column sideways if possible; return whether it moved."""
        step = 1 if direction is MoveDirection.RIGHT else -1
        next_col = self.col + step
        if not self.fits(self.row, next_col, self.rotation, board):
            return False
        self.col = next_col
        return True

    def rotate(self, board: Board) -> bool:
        """Rotate to the next orientation if possible; return whether it did."""
        next_rotation = self.kind.next_rotation(self.rotation)
        if not self.fits(self.row, self.col, next_rotation, board):
            return False
        self.rotation = next_rotation
        return True


def _to_cells(positions: Sequence[Position]) -> tuple[int, ...]:
    return tuple(cell_from_row_and_column(r, c) for r, c in positions)


def spawn_tetromino(rng: random.Random) -> Tetromino:
    """A random piece at the top of the board in its starting column."""
    kind = random_type(rng)
    return Tetromino(kind, 0, kind.starting_column(), Rotation.ZERO)


class TetrominoProvider:
    """Holds the falling piece and the one that follows it."""

    def __init__(self, rng: random.Random) -> None:
        self.current = spawn_tetromino(rng)
        self.upcoming = spawn_tetromino(rng)

    def advance(self, rng: random.Random, board: Board) -> bool:
        """Bring in the upcoming piece; return whether it has room to spawn."""
        self.current = dataclasses.replace(self.upcoming)
        self.upcoming = spawn_tetromino(rng)
        return not any(board[cell] for cell in self.current.cells())