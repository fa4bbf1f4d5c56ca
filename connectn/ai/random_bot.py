"""
random_bot.py - Uniform-random opponent for bot mode

The bot picks one of the legal columns uniformly at random. Its random source
is created and seeded once, when the bot is constructed, and can be replaced
by any object exposing ``choice`` (a seeded ``random.Random`` or a test stub).
"""

import random
from typing import Optional, TYPE_CHECKING

from connectn.debug import debug

if TYPE_CHECKING:
    from connectn.game.board import Board


class RandomBot:
    """Selects a random legal column."""

    def __init__(self, rng=None, seed: Optional[int] = None):
        """
        Args:
            rng: Random source with a ``choice`` method; overrides ``seed``
            seed: Seed for a fresh ``random.Random`` when no rng is given
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.move_count = 0

    def choose_column(self, board: 'Board') -> Optional[int]:
        """
        Pick a column for the next token.

        Args:
            board: Current board

        Returns:
            A 0-indexed legal column, or None if every column is full
        """
        valid_moves = board.get_valid_moves()
        if not valid_moves:
            debug.debug("No legal column left for the bot", "bot")
            return None

        column = self.rng.choice(valid_moves)
        self.move_count += 1
        debug.debug(f"Bot picked column {column} from {valid_moves}", "bot")
        return column
