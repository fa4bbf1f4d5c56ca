"""Tests for the Board primitives and the shared win scan."""

import numpy as np
import pytest

from connectn.game.board import Board
from connectn.utils import Player, Variant, check_win_at_position, render_board_ascii


def board_with(variant, cells, player=Player.ONE):
    board = Board(variant)
    for row, col in cells:
        board.grid[row, col] = player.value
    return board


class TestDrop:
    """Tests for dropping tokens."""

    def test_new_board_dimensions(self):
        """Board size follows the variant."""
        assert Board().grid.shape == (6, 7)
        assert Board(Variant.LARGE).grid.shape == (7, 9)

    def test_drop_returns_landing_row(self):
        """Tokens land on the lowest empty row."""
        board = Board()

        assert board.drop(2, Player.ONE) == 5
        assert board.drop(2, Player.TWO) == 4
        assert board.last_move == (4, 2)
        assert board.grid[5, 2] == Player.ONE.value
        assert board.grid[4, 2] == Player.TWO.value

    def test_drop_into_full_column(self):
        """A full column takes no more tokens."""
        board = Board()
        for _ in range(board.rows):
            board.drop(0, Player.ONE)
        before = board.get_state()

        assert board.is_column_full(0)
        assert board.drop(0, Player.TWO) is None
        assert np.array_equal(before, board.grid)

    @pytest.mark.parametrize("column", [-1, 7, 100])
    def test_out_of_bounds_column(self, column):
        """Columns outside the board are not valid moves."""
        board = Board()

        assert board.is_valid_move(column) is False
        assert board.drop(column, Player.ONE) is None

    def test_valid_moves_skip_full_columns(self):
        """Only columns with room are listed."""
        board = Board(Variant.LARGE)
        for _ in range(board.rows):
            board.drop(8, Player.TWO)

        assert board.get_valid_moves() == list(range(8))

    def test_top_row_full(self):
        """The board is full once every top cell is taken."""
        board = Board()
        board.grid[:, :] = Player.ONE.value
        board.grid[0, 3] = Player.EMPTY.value
        assert board.is_top_row_full() is False

        board.grid[0, 3] = Player.TWO.value
        assert board.is_top_row_full() is True

    def test_copy_is_independent(self):
        """Copies own their grid."""
        board = Board()
        board.drop(1, Player.ONE)
        clone = board.copy()
        clone.drop(1, Player.TWO)

        assert board.count(Player.TWO) == 0
        assert clone.count(Player.TWO) == 1
        assert clone.variant == board.variant


class TestCheckWin:
    """Tests for run detection around a cell."""

    def test_anti_diagonal(self):
        """A falling diagonal counts."""
        board = board_with(Variant.STANDARD, [(2, 1), (3, 2), (4, 3), (5, 4)])

        assert board.check_win(4, 3, Player.ONE) is True

    def test_three_is_not_enough(self):
        board = board_with(Variant.STANDARD, [(5, 0), (5, 1), (5, 2)])

        assert board.check_win(5, 1, Player.ONE) is False

    def test_large_needs_five(self):
        """Run length comes from the variant."""
        cells = [(6, 2), (5, 3), (4, 4), (3, 5)]
        board = board_with(Variant.LARGE, cells)
        assert board.check_win(5, 3, Player.ONE) is False

        board.grid[2, 6] = Player.ONE.value
        assert board.check_win(5, 3, Player.ONE) is True

    def test_no_wrap_around_edges(self):
        """Runs stop at the board edge and never continue on the next row."""
        board = board_with(Variant.STANDARD, [(4, 5), (4, 6), (3, 0), (3, 1)])

        assert board.check_win(4, 6, Player.ONE) is False
        assert board.check_win(3, 0, Player.ONE) is False

    def test_broken_run(self):
        """An opponent token breaks the run."""
        board = board_with(Variant.STANDARD, [(5, 0), (5, 1), (5, 3), (5, 4)])
        board.grid[5, 2] = Player.TWO.value

        assert board.check_win(5, 1, Player.ONE) is False

    def test_other_player_cell(self):
        """Runs are counted for the asking player, not the cell's occupant."""
        board = board_with(Variant.STANDARD, [(5, 0), (5, 1), (5, 2), (5, 3)])

        assert board.check_win(5, 0, Player.TWO) is False
        assert check_win_at_position(board.grid, 5, 0, 4) is True

    def test_empty_gap_completes_run(self):
        """The checked cell counts for the player even before a token lands there."""
        board = board_with(Variant.STANDARD, [(5, 0), (5, 1), (5, 3)])

        assert board.check_win(5, 2, Player.ONE) is True
        assert check_win_at_position(board.grid, 5, 2, 4) is False

    def test_winning_line_through_last_move(self):
        board = Board()
        for col in range(4):
            board.drop(col, Player.TWO)

        assert board.get_winning_line() == [(5, 0), (5, 1), (5, 2), (5, 3)]

    def test_no_winning_line(self):
        board = Board()
        board.drop(3, Player.ONE)

        assert board.get_winning_line() == []


class TestRender:
    """Tests for the ASCII rendering."""

    def test_render_marks_players_and_columns(self):
        board = Board()
        board.drop(0, Player.ONE)
        board.drop(6, Player.TWO)
        lines = board.render().splitlines()

        assert lines[-1] == "|1 2 3 4 5 6 7|"
        assert lines[-3] == "|X           O|"
        assert len(lines) == board.rows + 3

    def test_render_large(self):
        text = render_board_ascii(Board(Variant.LARGE).grid)

        assert text.splitlines()[-1] == "|1 2 3 4 5 6 7 8 9|"
