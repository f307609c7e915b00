"""
rules.py - Stateless Connect Four rules over a Board

Legal moves, move application, win and draw detection. Every 4-cell
window of the board (horizontal, vertical and both diagonals) is
precomputed once as index arrays, so both win detection here and the
evaluator can look at all windows with a single numpy gather.
"""

from typing import List, Optional, Tuple

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.game.board import Board
from connect4_engine.utils import (ROWS, COLS, CONNECT_N, DIRECTION_VECTORS, Player,
                                   is_valid_position)


def _build_windows() -> Tuple[np.ndarray, np.ndarray]:
    rows, cols = [], []
    for dr, dc in DIRECTION_VECTORS.values():
        for row in range(ROWS):
            for col in range(COLS):
                end_row = row + (CONNECT_N - 1) * dr
                end_col = col + (CONNECT_N - 1) * dc
                if not is_valid_position(end_row, end_col):
                    continue
                rows.append([row + i * dr for i in range(CONNECT_N)])
                cols.append([col + i * dc for i in range(CONNECT_N)])
    return np.array(rows, dtype=np.intp), np.array(cols, dtype=np.intp)


# 69 windows on a 6x7 board: 24 horizontal, 21 vertical, 12 per diagonal
WINDOW_ROWS, WINDOW_COLS = _build_windows()


def window_values(board: Board) -> np.ndarray:
    """Cell values of every window, shape (n_windows, CONNECT_N)."""
    return board.grid[WINDOW_ROWS, WINDOW_COLS]


def legal_columns(board: Board) -> List[int]:
    """Columns whose top cell is empty, in ascending order."""
    return [col for col in range(COLS) if board.grid[ROWS - 1, col] == Player.EMPTY.value]


def drop_row(board: Board, column: int) -> Optional[int]:
    """Row a piece dropped into ``column`` would land on, None if full."""
    return board.drop_row(column)


def apply_move(board: Board, column: int, player: Player) -> int:
    """
    Drop ``player``'s piece into ``column`` of ``board``.

    Returns:
        The row the piece landed on

    Raises:
        IllegalMoveError: If the column is out of range or full; the board
            is not modified
    """
    return board.drop_piece(column, player)


def _winning_mask(board: Board, player: Player) -> np.ndarray:
    if player == Player.EMPTY:
        raise ValueError("Win detection needs a real player")
    return np.all(window_values(board) == player.value, axis=1)


def check_win(board: Board, player: Player) -> bool:
    """True if ``player`` owns four contiguous cells on any line."""
    return bool(_winning_mask(board, player).any())


def winning_line(board: Board, player: Player) -> List[Tuple[int, int]]:
    """
    Positions of one winning line for ``player``.

    Returns:
        Four (row, col) pairs, or an empty list if the player has not won
    """
    hits = np.flatnonzero(_winning_mask(board, player))
    if hits.size == 0:
        return []
    index = hits[0]
    return [(int(r), int(c)) for r, c in zip(WINDOW_ROWS[index], WINDOW_COLS[index])]


def is_full(board: Board) -> bool:
    return bool(np.all(board.grid[ROWS - 1] != Player.EMPTY.value))


def winner(board: Board) -> Optional[Player]:
    """The player with a four-in-a-row, or None."""
    human_won = check_win(board, Player.HUMAN)
    ai_won = check_win(board, Player.AI)
    if human_won and ai_won:
        # Unreachable through legal play, only via a hand-built grid
        debug.warning("Both players have a winning line", "rules")
    if human_won:
        return Player.HUMAN
    if ai_won:
        return Player.AI
    return None


def is_terminal(board: Board) -> bool:
    """True once someone has won or the board is full."""
    human_won = check_win(board, Player.HUMAN)
    ai_won = check_win(board, Player.AI)
    return human_won or ai_won or is_full(board)
