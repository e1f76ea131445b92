"""
errors.py - Exception types raised by the dropfour core

A full column is not an error: it is reported through MoveOutcome.
"""


class DropFourError(Exception):
    """Base class for errors raised by the game core."""


class InvalidPlayersError(DropFourError, ValueError):
    """The two player identifiers are equal or rejected by the adapter's rule."""


class IllegalStateError(DropFourError, RuntimeError):
    """A session operation was requested in a state that does not allow it."""


class OutOfRangeError(DropFourError, IndexError):
    """A row or column index lies outside the board."""

    def __init__(self, axis: str, index: int, size: int):
        super().__init__(f"{axis.capitalize()} {index} out of range (0-{size - 1})")
        self.axis = axis
        self.index = index
        self.size = size
