# blocchi

A falling-blocks puzzle game played on a 10 × 20 board. Pieces fall one
after another. When a row is completely filled, it is cleared. Its cells
vanish one at a time, and then the rows above slide down. A panel beside
the board shows:

- your score
- your level
- how many lines you have cleared
- the current drop interval in milliseconds (`Δms`)
- the piece that comes next

## Installing

```
pip install .
```

This installs the game and its one runtime dependency, pygame.

## Playing

```
blocchi
```

This command opens a 1280 × 720 window. To get a repeatable sequence of pieces, pass a seed:

```
blocchi --seed 42
```

| Key          | Action                                        |
|--------------|-----------------------------------------------|
| Left / Right | move the falling piece sideways (on release)  |
| Up           | rotate the falling piece (on release)         |
| Down (held)  | drop the piece one row every frame            |
| Space        | pause or resume                               |
| N            | start a new game                              |

Moving and rotating only take effect while the game is running. They do nothing while paused, while rows are being cleared, or after the game is over.

### Scoring and speed

- Every piece that lands is worth 10 points.
- Every cleared row is worth 100 points.
- You go up one level for every 10 cleared lines, up to level 255.
- At first a piece falls one row every 800 ms. Each level takes 25 ms off
  that interval, down to a minimum of 50 ms.

The game ends when a new piece cannot be placed at the top of the board.
Press **N** to play again.

The game does not keep high scores or save games. Everything is lost when the window is closed.

## Using the game logic in your own code

The rules do not depend on any graphics, so you can drive them yourself:

```python
import random

from blocchi.board import GameBoard
from blocchi.session import Game, GameStatus
from blocchi.tetromino import MoveDirection

game = Game(random.Random(42))
game.move(MoveDirection.LEFT)
game.rotate()
game.tick(800, down_pressed=False)   # advance time by 800 ms
print(game.status is GameStatus.RUNNING, game.settings.score)

board = GameBoard()
board.init(random.Random(7))
print(board.current_type(), board.current_cells())
```

The package is split into four modules:

- `blocchi.tetromino` holds the piece shapes (`TetrominoType`), rotations (`Rotation`), movement (`Tetromino.drop_down`, `shift`, `rotate`) and `TetrominoProvider`. The provider holds the falling piece and the upcoming one.
- `blocchi.board` holds `GameBoard`, which does three jobs:
  - it lands pieces on the grid;
  - it counts and walks filled rows;
  - it collapses them.

  Using it before `init` raises `BoardNotInitializedError`.
- `blocchi.session` holds `Game`, `GameSettings`, `Timer` and `GameStatus`. `Game` handles timing, score and level, pause (`toggle_pause`) and restart (`restart`). `drop_interval_ms` and `level_for_lines` give the speed and level rules.
- `blocchi.app` opens the pygame window and draws the game. Its `main` function is the `blocchi` command.

## Running the tests

```
pip install ".[test]"
pytest
```