"""Board fixtures shared by the test modules."""

import random

import numpy as np

from connect4_engine.game.board import Board
from connect4_engine.game.rules import apply_move, is_terminal, legal_columns
from connect4_engine.utils import ROWS, COLS, Player

H = Player.HUMAN.value
A = Player.AI.value


def board_with(pieces):
    """Board from a {(row, col): Player} mapping; row 0 is the bottom."""
    grid = np.zeros((ROWS, COLS), dtype=np.int8)
    for (row, col), player in pieces.items():
        grid[row, col] = player.value
    return Board.from_grid(grid)


def draw_grid():
    """
    A full board without any four-in-a-row.

    Rows alternate XXOOXXO / OOXXOOX and every column alternates, which
    rules out horizontal and vertical runs; along any diagonal the pattern
    changes at least every second step.
    """
    grid = np.zeros((ROWS, COLS), dtype=np.int8)
    for row in range(ROWS):
        for col in range(COLS):
            grid[row, col] = H if (col // 2 + row) % 2 == 0 else A
    return grid


def random_board(rng: random.Random, max_moves: int = 20):
    """Non-terminal board reached by legal alternating moves, human first."""
    while True:
        board = Board()
        player = Player.HUMAN
        for _ in range(rng.randint(0, max_moves)):
            apply_move(board, rng.choice(legal_columns(board)), player)
            player = player.other()
            if is_terminal(board):
                break
        if not is_terminal(board):
            return board


def gravity_holds(board: Board) -> bool:
    occupied = board.grid != Player.EMPTY.value
    return not (occupied[1:] & ~occupied[:-1]).any()


class FixedChoice:
    """Stand-in rng whose ``choice`` always picks a given column when legal."""

    def __init__(self, column: int):
        self.column = column

    def choice(self, columns):
        return self.column if self.column in columns else columns[0]
