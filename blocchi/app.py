"""Window, input handling and drawing for the game."""

from __future__ import annotations

import argparse
import random
from collections.abc import Iterator, Sequence

import pygame

from .consts import (
    BLUE,
    DARK_BLUE,
    DARK_GRAY,
    DARK_GREEN,
    GRAY,
    GREEN,
    NUMBER_OF_CELLS,
    NUMBER_OF_COLUMNS,
    NUMBER_OF_ROWS,
    ORANGE,
    PINK,
    RED,
    SQUARE_SIZE,
    VIOLET,
    YELLOW,
)
from .session import Game, GameStatus
from .tetromino import MoveDirection, TetrominoType, row_and_column_from_cell

Color = tuple[float, float, float]
Point = tuple[float, float]

WINDOW_SIZE = (1280, 720)
FRAMES_PER_SECOND = 60
OUTLINE_WIDTH = 3
BACKGROUND = (0.02, 0.02, 0.02)

TEXT_TOP = 325.0
FIXED_TEXT_X = 200.0
VARIABLE_TEXT_X = 300.0
LINE_SIZE = 30.0
TEXT_SIZE = 25
PAUSED_TEXT_SIZE = 90

UPCOMING_OFFSET_X = 280.0
UPCOMING_OFFSET_Y = -150.0

_FILL_COLORS: dict[TetrominoType, Color] = {
    TetrominoType.I: PINK,
    TetrominoType.O: GREEN,
    TetrominoType.T: YELLOW,
    TetrominoType.J: BLUE,
    TetrominoType.L: VIOLET,
    TetrominoType.S: ORANGE,
    TetrominoType.Z: RED,
}

_OUTLINE_COLORS: dict[TetrominoType, Color] = {
    TetrominoType.I: RED,
    TetrominoType.O: DARK_GREEN,
    TetrominoType.T: ORANGE,
    TetrominoType.J: DARK_BLUE,
    TetrominoType.L: BLUE,
    TetrominoType.S: YELLOW,
    TetrominoType.Z: PINK,
}


def frame_position(row: int, col: int) -> Point:
    """World position of a square in the frame grid, row 0 at the bottom."""
    return (
        SQUARE_SIZE / 2.0 - 6.0 * SQUARE_SIZE + col * SQUARE_SIZE,
        SQUARE_SIZE / 2.0 - 11.0 * SQUARE_SIZE + row * SQUARE_SIZE,
    )


def board_cell_position(cell: int) -> Point:
    """World position of a board cell inside the frame."""
    row, col = row_and_column_from_cell(cell)
    return frame_position(NUMBER_OF_ROWS - row, col + 1)


def upcoming_cell_position(cell: int) -> Point:
    """World position of a cell of the upcoming-piece preview."""
    x, y = board_cell_position(cell)
    return x + UPCOMING_OFFSET_X, y + UPCOMING_OFFSET_Y


def border_cells() -> Iterator[tuple[int, int]]:
    """Frame-grid (row, column) squares that make up the board border."""
    last_row = NUMBER_OF_ROWS + 1
    last_col = NUMBER_OF_COLUMNS + 1
    for row in range(last_row + 1):
        for col in range(last_col + 1):
            if row in (0, last_row) or col in (0, last_col):
                yield row, col


def fill_color(kind: TetrominoType) -> Color:
    """Fill colour of a piece of the given shape."""
    return _FILL_COLORS[kind]


def outline_color(kind: TetrominoType) -> Color:
    """Outline colour of a piece of the given shape."""
    return _OUTLINE_COLORS[kind]


def _to_srgb(color: Color) -> tuple[int, int, int]:
    def channel(value: float) -> int:
        if value <= 0.0031308:
            encoded = 12.92 * value
        else:
            encoded = 1.055 * value ** (1.0 / 2.4) - 0.055
        return max(0, min(255, round(encoded * 255)))

    r, g, b = color
    return channel(r), channel(g), channel(b)


def _to_screen(point: Point) -> tuple[int, int]:
    width, height = WINDOW_SIZE
    x, y = point
    return round(width / 2 + x), round(height / 2 - y)


def _draw_square(surface: pygame.Surface, point: Point, fill: Color, outline: Color) -> None:
    rect = pygame.Rect(0, 0, int(SQUARE_SIZE), int(SQUARE_SIZE))
    rect.center = _to_screen(point)
    pygame.draw.rect(surface, _to_srgb(fill), rect)
    pygame.draw.rect(surface, _to_srgb(outline), rect, OUTLINE_WIDTH)


def _draw_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    point: Point,
    color: Color,
) -> None:
    rendered = font.render(text, True, _to_srgb(color))
    surface.blit(rendered, rendered.get_rect(topleft=_to_screen(point)))


def _effective_status(game: Game) -> GameStatus | None:
    if game.status is GameStatus.PAUSE:
        return game.settings.last_status
    return game.status


def _draw(surface: pygame.Surface, game: Game, font: pygame.font.Font,
          paused_font: pygame.font.Font) -> None:
    surface.fill(_to_srgb(BACKGROUND))

    for row, col in border_cells():
        _draw_square(surface, frame_position(row, col), GRAY, DARK_GRAY)

    board = game.board
    for cell in range(NUMBER_OF_CELLS):
        if board.is_cell_occupied(cell) and cell not in game.cleared_cells:
            _draw_square(surface, board_cell_position(cell), DARK_GRAY, GRAY)

    status = _effective_status(game)
    if status is GameStatus.RUNNING:
        kind = board.current_type()
        for cell in board.current_cells():
            _draw_square(surface, board_cell_position(cell), fill_color(kind), outline_color(kind))

    if status is not GameStatus.GAME_OVER:
        kind = board.upcoming_type()
        for cell in board.upcoming_cells():
            _draw_square(
                surface, upcoming_cell_position(cell), fill_color(kind), outline_color(kind)
            )

    settings = game.settings
    rows: Sequence[tuple[str, str | None]] = (
        ("Scores", str(settings.score)),
        ("Level", str(settings.level)),
        ("Cleared", str(settings.filled_up_lines)),
        ("Δms", str(game.drop_down_ms)),
        ("Next", None),
    )
    for line, (label, value) in enumerate(rows):
        y = TEXT_TOP - LINE_SIZE * line
        _draw_text(surface, font, label, (FIXED_TEXT_X, y), (1.0, 1.0, 1.0))
        if value is not None:
            _draw_text(surface, font, value, (VARIABLE_TEXT_X, y), RED)

    if game.status is GameStatus.PAUSE:
        rendered = paused_font.render("Paused", True, _to_srgb(BLUE))
        surface.blit(rendered, rendered.get_rect(center=_to_screen((0.0, 0.0))))


_RELEASE_ACTIONS = {
    pygame.K_RIGHT: lambda game: game.move(MoveDirection.RIGHT),
    pygame.K_LEFT: lambda game: game.move(MoveDirection.LEFT),
    pygame.K_UP: lambda game: game.rotate(),
}


def _run(game: Game) -> None:
    screen = pygame.display.set_mode(WINDOW_SIZE)
    pygame.display.set_caption("blocchi")
    font = pygame.font.Font(None, TEXT_SIZE)
    paused_font = pygame.font.Font(None, PAUSED_TEXT_SIZE)
    clock = pygame.time.Clock()

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_n:
                    game.restart()
                elif event.key == pygame.K_SPACE:
                    game.toggle_pause()
            elif event.type == pygame.KEYUP:
                action = _RELEASE_ACTIONS.get(event.key)
                if action is not None:
                    action(game)

        delta_ms = clock.tick(FRAMES_PER_SECOND)
        down_pressed = bool(pygame.key.get_pressed()[pygame.K_DOWN])
        game.tick(delta_ms, down_pressed)

        _draw(screen, game, font, paused_font)
        pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(prog="blocchi", description="Falling-blocks puzzle game.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece sequence")
    args = parser.parse_args(argv)

    game = Game(random.Random(args.seed))
    pygame.init()
    try:
        _run(game)
    finally:
        pygame.quit()
    return 0