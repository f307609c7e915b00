"""
minimax.py - Minimax search with alpha-beta pruning for Connect Four

The MinimaxPlayer looks a fixed number of plies ahead. Finished games are
scored as +/- WIN_SCORE (0 for a draw), positions at the depth limit are
scored by the evaluator from the maximizing player's point of view.

Every explored node works on its own copy of the board, so nothing the
search does is visible to sibling branches or to the caller.
"""

import math
import random
from typing import NamedTuple, Optional

from connect4_engine.ai.evaluator import score_position
from connect4_engine.debug import debug
from connect4_engine.exceptions import NoLegalMovesError
from connect4_engine.game.board import Board
from connect4_engine.game.rules import apply_move, check_win, is_full, legal_columns
from connect4_engine.utils import Player

SEARCH_DEPTH = 4
WIN_SCORE = 1_000_000


class SearchResult(NamedTuple):
    score: int
    column: Optional[int]


class MinimaxPlayer:
    """
    A Connect Four player that uses the minimax algorithm with alpha-beta pruning.

    Ties between equally good moves are broken by a random choice: before
    the candidates of a node are compared, the incumbent best column is
    drawn from ``rng``, and it is only replaced by a strictly better one.
    """

    def __init__(self, depth: int = SEARCH_DEPTH, rng=None,
                 maximizing_player: Player = Player.AI):
        """
        Args:
            depth: Plies to look ahead
            rng: Object with a ``choice`` method (random.Random or a numpy
                Generator); a fresh random.Random if omitted
            maximizing_player: The side this player searches for
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        if maximizing_player == Player.EMPTY:
            raise ValueError("The maximizing player must be a real player")
        self.depth = depth
        self.rng = rng if rng is not None else random.Random()
        self.maximizing_player = maximizing_player
        self.minimizing_player = maximizing_player.other()
        self.nodes_evaluated = 0  # For performance tracking
        self.last_result: Optional[SearchResult] = None

    def get_move(self, board: Board) -> int:
        """
        Pick a column for the maximizing player.

        The caller's board is never modified.

        Raises:
            NoLegalMovesError: If the game on ``board`` is already over
        """
        result = self.analyze(board)
        if result.column is None:
            debug.error("Search found no move on a finished board", "search")
            raise NoLegalMovesError("No legal move: the board is full or already won")
        return result.column

    def analyze(self, board: Board) -> SearchResult:
        """Full-window search from the root at the configured depth."""
        self.nodes_evaluated = 0
        with debug.timed("search", "search"):
            result = self.search(board.copy(), self.depth, -math.inf, math.inf, True)
        debug.debug(f"Depth {self.depth}: column {result.column}, score {result.score}, "
                    f"{self.nodes_evaluated} nodes", "search")
        self.last_result = result
        return result

    def search(self, board: Board, depth: int, alpha: float, beta: float,
               maximizing: bool) -> SearchResult:
        """
        Minimax with alpha-beta pruning.

        Args:
            board: Position to search (not modified)
            depth: Remaining plies
            alpha: Best score the maximizer can already guarantee
            beta: Best score the minimizer can already guarantee
            maximizing: True if the maximizing player moves at this node

        Returns:
            SearchResult with the node value and the chosen column (None at leaves)
        """
        self.nodes_evaluated += 1

        max_won = check_win(board, self.maximizing_player)
        min_won = check_win(board, self.minimizing_player)
        if max_won:
            return SearchResult(WIN_SCORE, None)
        if min_won:
            return SearchResult(-WIN_SCORE, None)
        if is_full(board):
            return SearchResult(0, None)
        if depth == 0:
            return SearchResult(score_position(board, self.maximizing_player), None)

        columns = legal_columns(board)
        # Random incumbent, searched first so that it survives ties
        best_column = int(self.rng.choice(columns))
        order = [best_column] + [c for c in columns if c != best_column]
        mover = self.maximizing_player if maximizing else self.minimizing_player

        if maximizing:
            value = -math.inf
            for column in order:
                child = board.copy()
                apply_move(child, column, mover)
                score = self.search(child, depth - 1, alpha, beta, False).score
                if score > value:
                    value = score
                    best_column = column
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
        else:
            value = math.inf
            for column in order:
                child = board.copy()
                apply_move(child, column, mover)
                score = self.search(child, depth - 1, alpha, beta, True).score
                if score < value:
                    value = score
                    best_column = column
                beta = min(beta, value)
                if alpha >= beta:
                    break

        return SearchResult(int(value), best_column)
