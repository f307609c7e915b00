"""
connect4_engine.ai - Position evaluation and move search for the computer player

See connect4_engine.ai.evaluator and connect4_engine.ai.minimax.
"""

__all__ = ['evaluator', 'minimax']
