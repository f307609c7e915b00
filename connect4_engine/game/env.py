"""
env.py - Gymnasium environment around a human vs AI game session

The agent takes the human's seat: every ``step`` drops the agent's piece
and, if the game goes on, lets the minimax AI answer before the next
observation is returned.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4_engine.ai.minimax import SEARCH_DEPTH
from connect4_engine.debug import debug
from connect4_engine.exceptions import IllegalMoveError
from connect4_engine.game.rules import legal_columns, winning_line
from connect4_engine.game.session import GameSession
from connect4_engine.utils import ROWS, COLS, MoveOutcome, Player


class ConnectFourEnv(gym.Env):
    """
    Connect Four against the minimax AI, following the Gymnasium interface.

    Observations are the board grid with row 0 at the bottom
    (0 empty, 1 agent, 2 AI).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, depth: int = SEARCH_DEPTH):
        """
        Args:
            render_mode: None, "ascii" (render returns a string) or "human" (prints)
            depth: Search depth of the AI opponent
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.render_mode = render_mode
        self.depth = depth
        self.session = GameSession(depth=depth)
        self._last_outcome = MoveOutcome.CONTINUED

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Args:
            seed: Seeds the AI's tie-break randomness
            options: Unused

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        # The AI draws its tie-breaks from the env's seeded generator
        self.session.ai.rng = self.np_random
        self.session.reset_game()
        self._last_outcome = MoveOutcome.CONTINUED

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column and the AI's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        moves_before = len(self.session.history)
        try:
            outcome = self.session.apply_human_move(int(action))
        except IllegalMoveError as exc:
            debug.warning(f"Invalid action {action}: {exc}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self._last_outcome = outcome
        reward = self.reward_step
        terminated = outcome.is_game_over()
        if outcome == MoveOutcome.HUMAN_WIN:
            reward = self.reward_win
        elif outcome == MoveOutcome.AI_WIN:
            reward = self.reward_lose
        elif outcome == MoveOutcome.DRAW:
            reward = self.reward_draw
        if terminated:
            debug.info(f"Episode over: {outcome.name}", "env")

        info = self._get_info()
        new_moves = self.session.history[moves_before:]
        info['ai_move'] = next((col for player, _, col in new_moves if player == Player.AI), None)

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, info

    def render(self) -> Optional[str]:
        if self.render_mode is None:
            return None
        winner = self.session.winner()
        text = self.session.board.render(winning_line(self.session.board, winner) if winner else None)
        if self.render_mode == "ascii":
            return text
        print(text)
        return None

    def action_masks(self) -> np.ndarray:
        """Boolean mask of the columns the agent may play."""
        mask = np.zeros(COLS, dtype=bool)
        if not self.session.is_over():
            mask[legal_columns(self.session.board)] = True
        return mask

    def _get_observation(self) -> np.ndarray:
        return self.session.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        board = self.session.board
        winner = self.session.winner()
        valid_moves = [] if self.session.is_over() else legal_columns(board)
        return {
            'valid_moves': valid_moves,
            'state': self.session.state.name,
            'outcome': self._last_outcome.name,
            'ai_move': None,
            'evaluation': self.session.current_evaluation(),
            'moves_made': len(self.session.history),
            'winning_line': winning_line(board, winner) if winner else [],
        }

    def close(self):
        pass
