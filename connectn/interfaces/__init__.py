"""
connectn.interfaces - User interfaces for connect-N

This package contains the ways of driving a GameEngine: a Flask web
application and a terminal CLI.
"""

# Don't import anything here; Flask is only needed for the web interface
__all__ = []
