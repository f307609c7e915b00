"""
board.py - Board representation for Connect Four

The Board holds cell occupancy only. Game logic (legal moves, wins,
terminal positions) lives in rules.py; the turn order lives in the
session. Row 0 is the bottom row.
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.exceptions import IllegalMoveError
from connect4_engine.utils import ROWS, COLS, Player, is_valid_column, render_board_ascii


class Board:
    """
    A fixed ROWS x COLS Connect Four grid.

    Pieces only ever enter through ``drop_piece``, which keeps every column
    filled contiguously from the bottom. The only way to clear a cell is
    ``reset``, which empties the whole board.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        """Empty every cell."""
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)

    def copy(self) -> 'Board':
        """Independent copy; changes to it never show up in this board."""
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        return new_board

    @classmethod
    def from_moves(cls, columns: Iterable[int], first: Player = Player.HUMAN) -> 'Board':
        """
        Build a board by dropping pieces into ``columns`` with alternating players.

        Raises:
            IllegalMoveError: If one of the columns is out of range or full
        """
        board = cls()
        player = first
        for column in columns:
            board.drop_piece(column, player)
            player = player.other()
        return board

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        """
        Build a board from nested cell values, ``rows[0]`` being the bottom row.

        Raises:
            ValueError: On a wrong shape, unknown cell values or a floating piece
        """
        grid = np.asarray(rows, dtype=np.int8)
        if grid.shape != (ROWS, COLS):
            raise ValueError(f"Expected a {ROWS}x{COLS} grid, got shape {grid.shape}")
        allowed = [p.value for p in Player]
        if not np.isin(grid, allowed).all():
            raise ValueError(f"Cell values must be one of {allowed}")
        occupied = grid != Player.EMPTY.value
        # A piece may only sit on the bottom row or on another piece
        floating = occupied[1:] & ~occupied[:-1]
        if floating.any():
            row, col = np.argwhere(floating)[0]
            raise ValueError(f"Piece at ({row + 1}, {col}) has an empty cell below it")
        board = cls.__new__(cls)
        board.grid = grid.copy()
        return board

    def cell(self, row: int, col: int) -> Player:
        return Player(int(self.grid[row, col]))

    def column_height(self, col: int) -> int:
        """Number of pieces in a column."""
        return int(np.count_nonzero(self.grid[:, col]))

    def move_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_column_full(self, col: int) -> bool:
        return self.grid[ROWS - 1, col] != Player.EMPTY.value

    def drop_row(self, col: int) -> Optional[int]:
        """
        Lowest empty row of a column, scanning upward from row 0.

        Returns:
            The row index, or None if the column is full
        """
        for row in range(ROWS):
            if self.grid[row, col] == Player.EMPTY.value:
                return row
        return None

    def drop_piece(self, col: int, player: Player) -> int:
        """
        Drop a piece for ``player`` into ``col``.

        Returns:
            The row the piece landed on

        Raises:
            IllegalMoveError: If the column is out of range or full (board untouched)
            ValueError: If ``player`` is Player.EMPTY
        """
        if player == Player.EMPTY:
            raise ValueError("Cannot drop an empty piece")
        if not is_valid_column(col):
            raise IllegalMoveError(f"Column {col} is out of range 0-{COLS - 1}", col)
        row = self.drop_row(col)
        if row is None:
            raise IllegalMoveError(f"Column {col} is full", col)
        self.grid[row, col] = player.value
        debug.trace(f"{player.name} piece at ({row}, {col})", "board")
        return row

    def get_state(self) -> np.ndarray:
        """Copy of the grid (row 0 = bottom)."""
        return self.grid.copy()

    def render(self, highlight: List = None) -> str:
        return render_board_ascii(self.grid, highlight)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __str__(self) -> str:
        return self.render()
