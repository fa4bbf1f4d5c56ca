"""
utils.py - Utility functions and constants for the connect-N implementation

This module provides common constants, enumerations, and helper functions
used throughout the game engine and its interfaces.
"""

import os
from enum import Enum, auto
from typing import Tuple, List, Optional
import numpy as np

# Server constants
PORT_ENV_VAR = "PORT"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
ASSETS_URL_PREFIX = "/assets"
DEFAULT_ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player, the bot in bot mode

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class Variant(Enum):
    """Board presets: (rows, cols, tokens in a row needed to win)."""
    STANDARD = (6, 7, 4)
    LARGE = (7, 9, 5)

    @property
    def rows(self) -> int:
        return self.value[0]

    @property
    def cols(self) -> int:
        return self.value[1]

    @property
    def connect_n(self) -> int:
        return self.value[2]

    @classmethod
    def from_form(cls, value) -> 'Variant':
        """
        Map a form value to a variant.

        "5" selects the large board; anything else, including a missing
        value, selects the standard one.

        Args:
            value: Raw value of the ``variant`` form field, or a Variant

        Returns:
            The matching Variant
        """
        if isinstance(value, Variant):
            return value
        if value is not None and str(value).strip() == str(cls.LARGE.connect_n):
            return cls.LARGE
        return cls.STANDARD


class GameMode(Enum):
    """Who is playing the current game."""
    NONE = auto()
    DUO = auto()   # Two humans alternate turns
    BOT = auto()   # Human against the random bot


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        grid: The game board
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def get_line_through(grid: np.ndarray, row: int, col: int, player_value: int,
                     direction: Direction) -> List[Tuple[int, int]]:
    """
    Collect the contiguous run of ``player_value`` through a cell along one axis.

    Args:
        grid: The game board
        row: Row index of the anchor cell
        col: Column index of the anchor cell
        player_value: Cell value to follow
        direction: Axis to scan, both ways

    Returns:
        List of (row, col) positions in the run, anchor first
    """
    dr, dc = DIRECTION_VECTORS[direction]
    positions = [(row, col)]

    # Check in the positive direction
    r, c = row + dr, col + dc
    while is_valid_position(grid, r, c) and grid[r, c] == player_value:
        positions.append((r, c))
        r += dr
        c += dc

    # Check in the negative direction
    r, c = row - dr, col - dc
    while is_valid_position(grid, r, c) and grid[r, c] == player_value:
        positions.append((r, c))
        r -= dr
        c -= dc

    return positions


def check_win_at_position(grid: np.ndarray, row: int, col: int, connect_n: int,
                          player_value: Optional[int] = None) -> bool:
    """
    Check if a token at the given position completes a run of ``connect_n``.

    The cell itself counts toward the run whatever it holds, so this also
    answers whether dropping a token there would win.

    Args:
        grid: The game board
        row: Row index where piece was placed
        col: Column index where piece was placed
        connect_n: Run length needed to win
        player_value: Player to check for (defaults to the cell's occupant)

    Returns:
        True if the move results in a win, False otherwise
    """
    if player_value is None:
        player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return False

    for direction in DIRECTION_VECTORS:
        if len(get_line_through(grid, row, col, player_value, direction)) >= connect_n:
            return True

    return False


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art with 1-based column numbers.

    Args:
        grid: The game board

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    result = []
    result.append("|" + "-" * (cols * 2 - 1) + "|")

    for row in range(rows):
        cells = [str(Player(int(grid[row, col]))) for col in range(cols)]
        result.append("|" + " ".join(cells) + "|")

    result.append("|" + "-" * (cols * 2 - 1) + "|")
    result.append("|" + " ".join(str(i + 1) for i in range(cols)) + "|")

    return "\n".join(result)
