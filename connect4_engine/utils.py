"""
utils.py - Constants, enumerations and helpers shared across the engine

Board geometry, the cell/player enumeration, game outcome enumerations
and the ASCII board renderer used by the terminal front-end.
"""

from enum import Enum, auto
from typing import Dict, List, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
CENTER_COL = COLS // 2


class Player(Enum):
    """Cell states. The two non-empty values double as the players."""
    EMPTY = 0
    HUMAN = 1
    AI = 2

    def other(self) -> 'Player':
        """Get the opposing player."""
        if self == Player.HUMAN:
            return Player.AI
        elif self == Player.AI:
            return Player.HUMAN
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.HUMAN:
            return "X"
        else:
            return "O"


class MoveOutcome(Enum):
    """What a move (and the reply it triggered, if any) led to."""
    CONTINUED = auto()
    HUMAN_WIN = auto()
    AI_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != MoveOutcome.CONTINUED

    @classmethod
    def win_for(cls, player: Player) -> 'MoveOutcome':
        if player == Player.HUMAN:
            return cls.HUMAN_WIN
        if player == Player.AI:
            return cls.AI_WIN
        raise ValueError(f"No win outcome for {player!r}")


class SessionState(Enum):
    """Turn state machine of a game session."""
    HUMAN_TURN = auto()
    AI_TURN = auto()
    HUMAN_WON = auto()
    AI_WON = auto()
    DRAW = auto()

    def is_terminal(self) -> bool:
        return self in (SessionState.HUMAN_WON, SessionState.AI_WON, SessionState.DRAW)


class Direction(Enum):
    """Line orientations used for win detection and evaluation."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# (row, col) step per orientation; row 0 is the bottom row
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


def is_valid_position(row: int, col: int) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(col: int) -> bool:
    return 0 <= col < COLS


def render_board_ascii(grid: np.ndarray, highlight: List[Tuple[int, int]] = None) -> str:
    """
    Render a board grid as ASCII art.

    The top row is printed first so the picture reads the way the pieces
    fall. Cells listed in ``highlight`` are drawn in lower case.

    Args:
        grid: ROWS x COLS array of cell values, row 0 at the bottom
        highlight: Optional (row, col) positions to emphasise

    Returns:
        Multi-line string
    """
    marked = set(highlight or [])
    border = "+" + "-" * (COLS * 2 - 1) + "+"
    lines = [border]
    for row in range(ROWS - 1, -1, -1):
        cells = []
        for col in range(COLS):
            symbol = str(Player(int(grid[row, col])))
            if (row, col) in marked:
                symbol = symbol.lower()
            cells.append(symbol)
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)
    lines.append(" " + " ".join(str(col) for col in range(COLS)) + " ")
    return "\n".join(lines)
