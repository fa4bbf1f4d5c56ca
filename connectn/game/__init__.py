"""
connectn.game - Core game mechanics for connect-N

This package contains the board representation and the engine that manages
the single active game.
"""

from connectn.game.board import Board
from connectn.game.engine import GameEngine, GameState, InvalidMove

__all__ = ['Board', 'GameEngine', 'GameState', 'InvalidMove']
