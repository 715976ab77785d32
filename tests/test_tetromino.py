import random

import pytest

from blocchi.consts import NUMBER_OF_CELLS, NUMBER_OF_COLUMNS, NUMBER_OF_ROWS
from blocchi.tetromino import (
    MoveDirection,
    Rotation,
    Tetromino,
    TetrominoProvider,
    TetrominoType,
    cell_from_row_and_column,
    random_type,
    row_and_column_from_cell,
    spawn_tetromino,
)

SUPPORTED = [
    (kind, rotation)
    for kind in TetrominoType
    for rotation in Rotation
    if kind is TetrominoType.T
    or kind is TetrominoType.J
    or kind is TetrominoType.L
    or rotation is Rotation.ZERO
    or (rotation is Rotation.HALF_PI and kind is not TetrominoType.O)
]


def empty_board():
    return [0] * NUMBER_OF_CELLS


def drop_until_landed(piece, board):
    for _ in range(NUMBER_OF_ROWS + 1):
        landed = piece.drop_down(board)
        if landed is not None:
            return landed
    raise AssertionError("piece never landed")


def test_cell_round_trip():
    for cell in range(NUMBER_OF_CELLS):
        row, col = row_and_column_from_cell(cell)
        assert 0 <= row < NUMBER_OF_ROWS
        assert 0 <= col < NUMBER_OF_COLUMNS
        assert cell_from_row_and_column(row, col) == cell


def test_second_row_starts_after_one_full_row():
    assert cell_from_row_and_column(1, 0) == NUMBER_OF_COLUMNS


def test_random_type_is_deterministic_and_covers_all():
    a = [random_type(random.Random(3)) for _ in range(5)]
    b = [random_type(random.Random(3)) for _ in range(5)]
    assert a == b
    rng = random.Random(42)
    assert {random_type(rng) for _ in range(500)} == set(TetrominoType)


def test_rotation_strings_in_errors():
    with pytest.raises(ValueError, match="90°"):
        TetrominoType.O.next_rotation(Rotation.HALF_PI)
    with pytest.raises(ValueError, match="270°"):
        TetrominoType.I.height(Rotation.THREE_HALF_PI)


@pytest.mark.parametrize("kind", [TetrominoType.T, TetrominoType.J, TetrominoType.L])
def test_four_state_rotation_cycles(kind):
    rotation = Rotation.ZERO
    seen = []
    for _ in range(4):
        rotation = kind.next_rotation(rotation)
        seen.append(rotation)
    assert rotation is Rotation.ZERO
    assert set(seen) == set(Rotation)


@pytest.mark.parametrize("kind", [TetrominoType.I, TetrominoType.S, TetrominoType.Z])
def test_two_state_rotation(kind):
    assert kind.next_rotation(Rotation.ZERO) is Rotation.HALF_PI
    assert kind.next_rotation(Rotation.HALF_PI) is Rotation.ZERO
    with pytest.raises(ValueError, match="does not support rotation"):
        kind.next_rotation(Rotation.PI)


def test_o_rotation_stays():
    assert TetrominoType.O.next_rotation(Rotation.ZERO) is Rotation.ZERO
    with pytest.raises(ValueError):
        TetrominoType.O.next_rotation(Rotation.HALF_PI)


def test_i_height_unsupported_rotation():
    with pytest.raises(ValueError):
        TetrominoType.I.height(Rotation.PI)


@pytest.mark.parametrize("kind,rotation", SUPPORTED)
def test_height_matches_downward_extent(kind, rotation):
    piece = Tetromino(kind, 5, 5, rotation)
    positions = piece.positions(5, 5, rotation)
    assert len(set(positions)) == 4
    assert positions[0] == (5, 5)
    assert kind.height(rotation) == max(r for r, _ in positions) - 5 + 1


def test_positions_unsupported_rotation():
    piece = Tetromino(TetrominoType.S, 5, 5)
    with pytest.raises(ValueError, match="'S'"):
        piece.positions(5, 5, Rotation.PI)


def test_spawn_is_at_top_in_starting_column():
    rng = random.Random(7)
    for _ in range(50):
        piece = spawn_tetromino(rng)
        assert piece.row == 0
        assert piece.rotation is Rotation.ZERO
        assert piece.col == piece.kind.starting_column()
        assert all(0 <= c < NUMBER_OF_CELLS for c in piece.cells())
        assert piece.fits(piece.row, piece.col, piece.rotation, empty_board())


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_drop_lands_on_bottom(kind):
    board = empty_board()
    piece = Tetromino(kind, 0, kind.starting_column())
    landed = drop_until_landed(piece, board)
    assert landed == piece.cells()
    assert max(row_and_column_from_cell(c)[0] for c in landed) == NUMBER_OF_ROWS - 1
    assert piece.row == NUMBER_OF_ROWS - kind.height(piece.rotation)


def test_drop_lands_on_occupied_row():
    board = empty_board()
    for col in range(NUMBER_OF_COLUMNS):
        board[cell_from_row_and_column(NUMBER_OF_ROWS - 1, col)] = 1
    piece = Tetromino(TetrominoType.O, 0, 4)
    landed = drop_until_landed(piece, board)
    assert max(row_and_column_from_cell(c)[0] for c in landed) == NUMBER_OF_ROWS - 2
    assert not any(board[c] for c in landed)


def test_shift_stops_at_walls():
    board = empty_board()
    piece = Tetromino(TetrominoType.T, 0, 5)
    while piece.shift(MoveDirection.LEFT, board):
        pass
    assert min(row_and_column_from_cell(c)[1] for c in piece.cells()) == 0
    while piece.shift(MoveDirection.RIGHT, board):
        pass
    assert max(row_and_column_from_cell(c)[1] for c in piece.cells()) == NUMBER_OF_COLUMNS - 1


def test_shift_blocked_by_occupied_cell():
    board = empty_board()
    piece = Tetromino(TetrominoType.O, 0, 4)
    board[cell_from_row_and_column(0, 6)] = 1
    before = piece.cells()
    assert piece.shift(MoveDirection.RIGHT, board) is False
    assert piece.cells() == before
    assert piece.shift(MoveDirection.LEFT, board) is True
    assert piece.col == 3


def test_rotate_blocked_at_top_then_allowed_lower():
    board = empty_board()
    piece = Tetromino(TetrominoType.T, 0, 5)
    assert piece.rotate(board) is False
    assert piece.rotation is Rotation.ZERO
    assert piece.drop_down(board) is None
    assert piece.rotate(board) is True
    assert piece.rotation is Rotation.HALF_PI


def test_rotate_o_keeps_shape():
    board = empty_board()
    piece = Tetromino(TetrominoType.O, 3, 4)
    before = piece.cells()
    assert piece.rotate(board) is True
    assert piece.cells() == before


def test_provider_advance_promotes_upcoming():
    rng = random.Random(11)
    provider = TetrominoProvider(rng)
    upcoming = provider.upcoming
    assert provider.advance(rng, empty_board()) is True
    assert provider.current == upcoming
    assert provider.current is not upcoming


def test_provider_advance_reports_blocked_spawn():
    rng = random.Random(5)
    provider = TetrominoProvider(rng)
    assert provider.advance(rng, [1] * NUMBER_OF_CELLS) is False


def test_provider_same_seed_same_pieces():
    a = TetrominoProvider(random.Random(99))
    b = TetrominoProvider(random.Random(99))
    assert a.current == b.current
    assert a.upcoming == b.upcoming