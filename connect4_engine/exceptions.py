"""
exceptions.py - Error types raised by the engine
"""

from typing import Optional


class Connect4Error(Exception):
    """Base class for all engine errors."""


class IllegalMoveError(Connect4Error):
    """A move was rejected; the board and session are left unchanged."""

    def __init__(self, message: str, column: Optional[int] = None):
        super().__init__(message)
        self.column = column


class NoLegalMovesError(Connect4Error):
    """
    The search was asked for a move on a board that has none.

    Callers must check for a terminal board first, so this signals a
    programming error rather than a recoverable game situation.
    """
