"""
session.py - Turn orchestration for a human vs computer game

The GameSession owns the authoritative board. Human input arrives as a
column index; the computer's reply comes from the MinimaxPlayer, which
only ever sees a copy of the board. After each move the session resolves
the position: a win for the mover ends the game, a full board is a draw,
otherwise the turn passes to the other side.
"""

from typing import List, Optional, Tuple

from connect4_engine.ai.evaluator import score_position
from connect4_engine.ai.minimax import SEARCH_DEPTH, MinimaxPlayer, SearchResult
from connect4_engine.debug import debug
from connect4_engine.exceptions import IllegalMoveError
from connect4_engine.game.board import Board
from connect4_engine.game.rules import apply_move, check_win, is_full, is_terminal
from connect4_engine.utils import COLS, MoveOutcome, Player, SessionState, is_valid_column

_WON_STATE = {
    Player.HUMAN: SessionState.HUMAN_WON,
    Player.AI: SessionState.AI_WON,
}


class GameSession:
    """
    One game of the human against the minimax AI. The human always moves first.

    The front-end either calls ``apply_human_move`` (human move and the AI
    reply in one go) or ``submit_human_move`` followed later by
    ``play_ai_turn``, e.g. to let a drop animation finish in between.
    """

    def __init__(self, depth: int = SEARCH_DEPTH, rng=None, board: Optional[Board] = None):
        """
        Args:
            depth: Search depth of the AI
            rng: Random source for the AI's tie-breaks
            board: Optional starting position (copied); the human moves next

        Raises:
            ValueError: If the starting position is already finished
        """
        debug.debug(f"Initializing GameSession (depth {depth})", "session")
        self.ai = MinimaxPlayer(depth=depth, rng=rng, maximizing_player=Player.AI)
        self.reset_game()
        if board is not None:
            if is_terminal(board):
                raise ValueError("Cannot start a session from a finished position")
            self.board = board.copy()

    def reset_game(self) -> None:
        """Start a new game: empty board, human to move."""
        debug.debug("Resetting game", "session")
        self.board = Board()
        self.state = SessionState.HUMAN_TURN
        self.history: List[Tuple[Player, int, int]] = []  # (player, row, column)
        self.last_search: Optional[SearchResult] = None

    def is_over(self) -> bool:
        return self.state.is_terminal()

    def winner(self) -> Optional[Player]:
        if self.state == SessionState.HUMAN_WON:
            return Player.HUMAN
        if self.state == SessionState.AI_WON:
            return Player.AI
        return None

    def outcome(self) -> MoveOutcome:
        """Outcome matching the current state."""
        if self.state == SessionState.HUMAN_WON:
            return MoveOutcome.HUMAN_WIN
        if self.state == SessionState.AI_WON:
            return MoveOutcome.AI_WIN
        if self.state == SessionState.DRAW:
            return MoveOutcome.DRAW
        return MoveOutcome.CONTINUED

    def legal_move(self, column: int) -> bool:
        """Whether the human could play ``column`` right now."""
        return (self.state == SessionState.HUMAN_TURN
                and is_valid_column(column)
                and not self.board.is_column_full(column))

    def submit_human_move(self, column: int) -> MoveOutcome:
        """
        Apply the human's move without triggering the AI reply.

        Returns:
            HUMAN_WIN, DRAW or CONTINUED (the AI is then to move)

        Raises:
            IllegalMoveError: If it is not the human's turn or the column is
                out of range or full; nothing changes
        """
        if self.state != SessionState.HUMAN_TURN:
            debug.warning(f"Rejected column {column}: state is {self.state.name}", "session")
            raise IllegalMoveError(f"Not the human's turn (state {self.state.name})", column)
        if not is_valid_column(column):
            debug.warning(f"Rejected column {column}: out of range", "session")
            raise IllegalMoveError(f"Column {column} is out of range 0-{COLS - 1}", column)
        if self.board.is_column_full(column):
            debug.warning(f"Rejected column {column}: full", "session")
            raise IllegalMoveError(f"Column {column} is full", column)
        return self._play(column, Player.HUMAN)

    def play_ai_turn(self) -> MoveOutcome:
        """
        Let the AI search the current board and play its move.

        Returns:
            AI_WIN, DRAW or CONTINUED (the human is then to move)

        Raises:
            IllegalMoveError: If it is not the AI's turn
        """
        if self.state != SessionState.AI_TURN:
            raise IllegalMoveError(f"Not the AI's turn (state {self.state.name})")
        column = self.ai.get_move(self.board)
        self.last_search = self.ai.last_result
        debug.info(f"AI plays column {column} (score {self.last_search.score})", "session")
        return self._play(column, Player.AI)

    def apply_human_move(self, column: int) -> MoveOutcome:
        """
        Apply the human's move and, if the game goes on, the AI's reply.

        Returns:
            The outcome once the AI reply (if any) has been resolved

        Raises:
            IllegalMoveError: As for ``submit_human_move``
        """
        outcome = self.submit_human_move(column)
        if outcome.is_game_over():
            return outcome
        return self.play_ai_turn()

    def current_evaluation(self) -> int:
        """Raw evaluator score of the current board from the AI's side."""
        return score_position(self.board, Player.AI)

    def _play(self, column: int, player: Player) -> MoveOutcome:
        row = apply_move(self.board, column, player)
        self.history.append((player, row, column))
        debug.debug(f"{player.name} played ({row}, {column})", "session")
        return self._resolve(player)

    def _resolve(self, mover: Player) -> MoveOutcome:
        if check_win(self.board, mover):
            self.state = _WON_STATE[mover]
            debug.info(f"Game over: {mover.name} wins after {len(self.history)} moves", "session")
            return MoveOutcome.win_for(mover)
        if is_full(self.board):
            self.state = SessionState.DRAW
            debug.info("Game over: draw", "session")
            return MoveOutcome.DRAW
        self.state = SessionState.AI_TURN if mover == Player.HUMAN else SessionState.HUMAN_TURN
        return MoveOutcome.CONTINUED
