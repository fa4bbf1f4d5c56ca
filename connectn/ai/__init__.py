"""
connectn/ai/__init__.py - Computer opponents

Only a uniform-random bot is provided.
"""

from connectn.ai.random_bot import RandomBot

__all__ = ['RandomBot']
