"""
connect4_engine.interfaces - User interfaces for Connect Four

Currently a terminal front-end; the engine itself does no I/O.
"""

# Don't import anything here to avoid circular imports
__all__ = []
