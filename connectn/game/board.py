"""
board.py - Board representation and core drop mechanics for connect-N

This module implements the Board class which holds the grid for one game variant
and provides the primitives the engine builds on: dropping a token, column
legality, win detection around a placed token and the full-board check.
"""

import numpy as np
from typing import List, Tuple, Optional

from connectn.debug import debug
from connectn.utils import (Player, Variant, DIRECTION_VECTORS,
                            check_win_at_position, get_line_through,
                            render_board_ascii)


class Board:
    """
    A connect-N board sized by a Variant.

    Rows are indexed from the top (row 0) and columns from the left, both
    0-based. The board knows nothing about turns; the engine decides who moves.
    """

    def __init__(self, variant: Variant = Variant.STANDARD):
        """
        Initialize an empty board.

        Args:
            variant: Board preset giving the dimensions and run length
        """
        debug.debug(f"Initializing new Board ({variant.name})", "board")
        self.variant = variant
        self.reset()

    def reset(self):
        """Empty every cell."""
        debug.trace("Resetting board", "board")
        self.grid = np.zeros((self.variant.rows, self.variant.cols), dtype=int)
        self.last_move: Optional[Tuple[int, int]] = None

    @property
    def rows(self) -> int:
        return self.variant.rows

    @property
    def cols(self) -> int:
        return self.variant.cols

    @property
    def connect_n(self) -> int:
        return self.variant.connect_n

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same cells
        """
        new_board = Board.__new__(Board)
        new_board.variant = self.variant
        new_board.grid = self.grid.copy()
        new_board.last_move = self.last_move
        return new_board

    def is_column_full(self, column: int) -> bool:
        """A column is full once its top cell is occupied."""
        return self.grid[0, column] != Player.EMPTY.value

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a token can be dropped in a column.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            True if the column exists and is not full
        """
        if not (0 <= column < self.cols):
            debug.trace(f"Invalid move: column {column} out of bounds", "board")
            return False

        if self.is_column_full(column):
            debug.trace(f"Invalid move: column {column} is full", "board")
            return False

        return True

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns a token can still be dropped into.

        Returns:
            List of valid column indices (0-indexed)
        """
        return [col for col in range(self.cols) if not self.is_column_full(col)]

    def drop(self, column: int, player: Player) -> Optional[int]:
        """
        Drop a token into the lowest empty cell of a column.

        Args:
            column: The column to drop into (0-indexed)
            player: Owner of the token

        Returns:
            The row the token landed on, or None if the move is not valid
        """
        if not self.is_valid_move(column):
            return None

        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                debug.trace(f"Placing {player.name} at ({row}, {column})", "board")
                self.grid[row, column] = player.value
                self.last_move = (row, column)
                return row

        return None

    def check_win(self, row: int, col: int, player: Player) -> bool:
        """
        Check whether ``player`` has a run of ``connect_n`` through (row, col).

        Counting stops at the board edge or the first cell not owned by
        ``player`` and never wraps around.
        """
        with debug.timed("win_check", "board"):
            return check_win_at_position(self.grid, row, col, self.connect_n, player.value)

    def is_top_row_full(self) -> bool:
        """True when no column can take another token."""
        return bool(np.all(self.grid[0] != Player.EMPTY.value))

    def count(self, player: Player) -> int:
        """Number of cells holding ``player``'s tokens."""
        return int(np.count_nonzero(self.grid == player.value))

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning run through the last move.

        Returns:
            List of (row, col) positions forming the run, or empty list if the
            last move did not win
        """
        if self.last_move is None:
            return []

        row, col = self.last_move
        player_value = int(self.grid[row, col])
        if player_value == Player.EMPTY.value:
            return []

        for direction in DIRECTION_VECTORS:
            positions = get_line_through(self.grid, row, col, player_value, direction)
            if len(positions) >= self.connect_n:
                return sorted(positions)

        return []

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array representing the board
        """
        return self.grid.copy()

    def to_list(self) -> List[List[int]]:
        """Board cells as nested lists of plain ints."""
        return self.grid.tolist()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
