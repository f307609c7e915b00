"""
connect4_engine.game - Board, rules and game orchestration

The session (game.session) and the Gymnasium environment (game.env)
depend on connect4_engine.ai and are imported from their own modules.
"""

from connect4_engine.game.board import Board

__all__ = ['Board']
