"""
dropfour - Two-player column-drop game engine

This package provides the board, win detection and turn/state machine of a
four-in-a-row game, together with a terminal adapter and a Gymnasium
environment adapter built on top of it.
"""

# Version number
__version__ = '0.1.0'
