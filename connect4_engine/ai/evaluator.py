"""
evaluator.py - Heuristic scoring of non-terminal Connect Four positions

The score is a center-column bonus plus a score per 4-cell window. It is
deliberately lopsided: the opponent's three-with-a-gap is punished hard,
while the opponent's twos and fours are ignored (fours never reach the
evaluator because the search scores finished games itself).
"""

import numpy as np

from connect4_engine.game.board import Board
from connect4_engine.game.rules import window_values
from connect4_engine.utils import CENTER_COL, Player

CENTER_WEIGHT = 6
FOUR_SCORE = 100
THREE_SCORE = 10
TWO_SCORE = 5
OPPONENT_THREE_PENALTY = -80


def window_scores(windows: np.ndarray, player: Player) -> np.ndarray:
    """
    Score each window from ``player``'s point of view.

    Args:
        windows: Array of shape (n, 4) holding cell values
        player: Perspective player

    Returns:
        Integer array of shape (n,)
    """
    mine = np.count_nonzero(windows == player.value, axis=1)
    theirs = np.count_nonzero(windows == player.other().value, axis=1)
    empty = np.count_nonzero(windows == Player.EMPTY.value, axis=1)

    scores = np.zeros(len(windows), dtype=np.int64)
    scores[mine == 4] += FOUR_SCORE
    scores[(mine == 3) & (empty == 1)] += THREE_SCORE
    scores[(mine == 2) & (empty == 2)] += TWO_SCORE
    scores[(theirs == 3) & (empty == 1)] += OPPONENT_THREE_PENALTY
    return scores


def center_bonus(board: Board, player: Player) -> int:
    return CENTER_WEIGHT * int(np.count_nonzero(board.grid[:, CENTER_COL] == player.value))


def score_position(board: Board, player: Player) -> int:
    """Heuristic value of ``board`` for ``player``; higher is better."""
    if player == Player.EMPTY:
        raise ValueError("Evaluation needs a real player")
    return center_bonus(board, player) + int(window_scores(window_values(board), player).sum())
