"""Shared fixtures for the connect-N tests."""

import numpy as np
import pytest

from connectn.game.engine import GameEngine
from connectn.utils import Player


class ScriptedRng:
    """Random source stand-in that plays a fixed list of 0-based columns.

    Each ``choice`` call returns the next scripted column that is legal, and
    falls back to the first legal column once the script runs out.
    """

    def __init__(self, columns=()):
        self.columns = list(columns)
        self.calls = []

    def choice(self, options):
        options = list(options)
        self.calls.append(options)
        while self.columns:
            column = self.columns.pop(0)
            if column in options:
                return column
        return options[0]


# Standard board with every cell filled and no run of four: rows alternate
# between these two patterns, so runs never exceed two in any direction.
_ROW_A = [1, 1, 2, 2, 1, 1, 2]
_ROW_B = [2, 2, 1, 1, 2, 2, 1]


def drawn_standard_grid():
    """6x7 grid with no winner, with only the top-right cell left empty."""
    grid = np.array([_ROW_A, _ROW_B] * 3, dtype=int)
    grid[0, 6] = Player.EMPTY.value
    return grid


@pytest.fixture
def drawn_grid():
    return drawn_standard_grid()


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def engine():
    """A fresh engine in the unstarted rest state."""
    return GameEngine(seed=1234)


@pytest.fixture
def duo_engine(engine):
    """An engine running a standard two-player game."""
    engine.start("4")
    return engine
