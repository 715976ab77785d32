"""Game rules independent of rendering: timing, scoring, levels and states."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from .board import GameBoard
from .consts import (
    BASE_SPEED_MS,
    CLEAN_UP_OCCUPIED_ROWS_TIME_DELTA_MS,
    CLEARED_UP_LINES_PER_LEVEL,
    LEVEL_SPEED_DELTA,
    MAX_LEVEL,
    MIN_SPEED_MS,
    POINTS_FOR_CLEARED_ROW,
    POINTS_FOR_TETROMINO_DROPPED,
)
from .tetromino import MoveDirection


class GameStatus(Enum):
    """Phase the game is in."""

    RUNNING = "running"
    REMOVING_FILLED_ROWS = "removing_filled_rows"
    GAME_OVER = "game_over"
    PAUSE = "pause"


@dataclass
class Timer:
    """Repeating timer driven by explicit millisecond ticks."""

    duration_ms: int
    elapsed_ms: int = 0
    just_finished: bool = False

    def tick(self, delta_ms: int) -> bool:
        """Advance by ``delta_ms``; return whether the period elapsed."""
        if delta_ms < 0:
            raise ValueError("delta_ms must not be negative")
        self.elapsed_ms += delta_ms
        if self.elapsed_ms >= self.duration_ms:
            self.just_finished = True
            self.elapsed_ms = self.elapsed_ms % self.duration_ms if self.duration_ms else 0
        else:
            self.just_finished = False
        return self.just_finished

    def reset(self) -> None:
        """Restart the current period."""
        self.elapsed_ms = 0
        self.just_finished = False


def drop_interval_ms(level: int) -> int:
    """Milliseconds between automatic drops at ``level``."""
    delta = min((level - 1) * LEVEL_SPEED_DELTA, BASE_SPEED_MS - MIN_SPEED_MS)
    return BASE_SPEED_MS - delta


def level_for_lines(lines: int) -> int:
    """Level reached after clearing ``lines`` rows."""
    return min(MAX_LEVEL, lines // CLEARED_UP_LINES_PER_LEVEL + 1)


@dataclass
class GameSettings:
    """Score, level and timers of a running game."""

    descend_timer: Timer = field(default_factory=lambda: Timer(BASE_SPEED_MS))
    last_despawned_cell: int | None = None
    remove_filled_cells_timer: Timer = field(
        default_factory=lambda: Timer(CLEAN_UP_OCCUPIED_ROWS_TIME_DELTA_MS)
    )
    level: int = 1
    filled_up_lines: int = 0
    score: int = 0
    last_status: GameStatus | None = None


class Game:
    """A game session: board, settings and state transitions."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self.board = GameBoard()
        self.board.init(rng)
        self.settings = GameSettings()
        self.status = GameStatus.RUNNING
        self.drop_down_ms = BASE_SPEED_MS
        # Cells of filled rows already wiped during the clearing animation.
        self.cleared_cells: set[int] = set()

    def tick(self, delta_ms: int, down_pressed: bool = False) -> None:
        """Advance the game by ``delta_ms`` milliseconds."""
        if self.status is GameStatus.RUNNING:
            self._descend(delta_ms, down_pressed)
        elif self.status is GameStatus.REMOVING_FILLED_ROWS:
            self._remove_filled_rows(delta_ms)

    def _descend(self, delta_ms: int, down_pressed: bool) -> None:
        settings = self.settings
        timer_finished = settings.descend_timer.tick(delta_ms)
        if not (timer_finished or down_pressed):
            return

        if self.board.drop_down() is not None:
            settings.score += POINTS_FOR_TETROMINO_DROPPED
            if self.board.next_tetromino(self.rng):
                filled = self.board.filled_row_count()
                if filled > 0:
                    settings.last_despawned_cell = None
                    settings.remove_filled_cells_timer.reset()
                    settings.score += filled * POINTS_FOR_CLEARED_ROW
                    settings.filled_up_lines += filled
                    settings.level = level_for_lines(settings.filled_up_lines)
                    self.cleared_cells.clear()
                    self.status = GameStatus.REMOVING_FILLED_ROWS
            else:
                self.status = GameStatus.GAME_OVER

            self.drop_down_ms = drop_interval_ms(settings.level)
            settings.descend_timer = Timer(self.drop_down_ms)

        if not timer_finished:
            settings.descend_timer.reset()

    def _remove_filled_rows(self, delta_ms: int) -> None:
        settings = self.settings
        if not settings.remove_filled_cells_timer.tick(delta_ms):
            return

        cell = self.board.next_cell_from_filled_row_after(settings.last_despawned_cell)
        if cell is None:
            self.board.collapse_filled_rows()
            self.cleared_cells.clear()
            settings.last_despawned_cell = None
            settings.descend_timer.reset()
            self.status = GameStatus.RUNNING
        else:
            self.cleared_cells.add(cell)
            settings.last_despawned_cell = cell
        settings.remove_filled_cells_timer.reset()

    def move(self, direction: MoveDirection) -> bool:
        """Shift the falling piece while running; return whether it moved."""
        if self.status is not GameStatus.RUNNING:
            return False
        return self.board.move_tetromino(direction)

    def rotate(self) -> bool:
        """Rotate the falling piece while running; return whether it rotated."""
        if self.status is not GameStatus.RUNNING:
            return False
        return self.board.rotate_tetromino()

    def toggle_pause(self) -> None:
        """Pause, or resume the state the game was paused in."""
        if self.status is GameStatus.PAUSE:
            if self.settings.last_status is not None:
                self.status = self.settings.last_status
        else:
            self.settings.last_status = self.status
            self.status = GameStatus.PAUSE

    def restart(self) -> None:
        """Start a new game on an empty board."""
        self.status = GameStatus.RUNNING
        settings = self.settings
        settings.last_status = None
        settings.descend_timer = Timer(BASE_SPEED_MS)
        settings.level = 1
        settings.score = 0
        settings.last_despawned_cell = None
        settings.filled_up_lines = 0
        settings.remove_filled_cells_timer.reset()
        self.drop_down_ms = BASE_SPEED_MS
        self.cleared_cells.clear()
        self.board.reset(self.rng)