"""Game-wide constants: board geometry, scoring, speed and palette."""

NUMBER_OF_ROWS = 20
NUMBER_OF_COLUMNS = 10
NUMBER_OF_CELLS = NUMBER_OF_ROWS * NUMBER_OF_COLUMNS

CLEAN_UP_OCCUPIED_ROWS_TIME_DELTA_MS = 5
SQUARE_SIZE = 30.0

POINTS_FOR_CLEARED_ROW = 100
POINTS_FOR_TETROMINO_DROPPED = 10
CLEARED_UP_LINES_PER_LEVEL = 10
MAX_LEVEL = 255
BASE_SPEED_MS = 800
LEVEL_SPEED_DELTA = 25
MIN_SPEED_MS = 50

# Colours as linear RGB components in the range 0..1.
ORANGE = (1.0, 0.647, 0.0)
RED = (1.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
DARK_BLUE = (0.0, 0.0, 0.392)
GREEN = (0.0, 1.0, 0.0)
DARK_GREEN = (0.0, 0.392, 0.0)
VIOLET = (0.498, 1.0, 1.0)
GRAY = (0.7, 0.7, 0.7)
PINK = (1.0, 0.753, 0.796)
YELLOW = (1.0, 1.0, 0.0)
DARK_GRAY = (0.3, 0.3, 0.3)