"""
dropfour.interfaces - Adapters over the game core

This package contains the terminal interface and the Gymnasium environment.
"""

# Don't import anything here: the env pulls in gymnasium
__all__ = []
