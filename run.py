#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four against the minimax AI

Examples:

    # Play a game (human moves first)
    python run.py play

    # Stronger but slower opponent, reproducible tie-breaks
    python run.py --depth 6 --seed 7 play

    # Analyze a position: 42 cells, bottom row first, 0 empty / 1 human / 2 AI
    python run.py analyze --position 1,1,1,0,2,2,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0

    # Benchmark the search with detailed logging
    python run.py --debug benchmark --iterations 50
"""

import sys

from connect4_engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
