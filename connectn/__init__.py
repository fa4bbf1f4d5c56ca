"""
connectn - Connect-N board game engine with web and terminal interfaces

This package provides the game engine for generalised Connect Four (4 in a row
on 6x7, or 5 in a row on 7x9), a random-move bot, a Flask web interface and a
terminal interface that drive the engine.
"""

# Version number
__version__ = '0.1.0'
