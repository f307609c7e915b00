"""
connect4_engine - Connect Four against a minimax computer opponent

This package provides the board and rules of Connect Four, a heuristic
position evaluator, a depth-limited minimax search with alpha-beta
pruning, a turn-based game session, a Gymnasium environment and a
terminal front-end.
"""

# Version number
__version__ = '0.1.0'
