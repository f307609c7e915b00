"""
cli.py - Command-line interface for playing against the minimax AI

Commands:
    play       interactive game, human (X) against the computer (O)
    analyze    inspect a position given as 42 comma-separated cells
    benchmark  time the AI's move search on random positions
"""

import argparse
import random
import sys
import time
from typing import List, Optional, Sequence, Tuple

from connect4_engine.ai.evaluator import score_position
from connect4_engine.ai.minimax import SEARCH_DEPTH, WIN_SCORE, MinimaxPlayer
from connect4_engine.debug import debug, DebugLevel
from connect4_engine.exceptions import IllegalMoveError
from connect4_engine.game.board import Board
from connect4_engine.game.rules import (apply_move, check_win, is_full, is_terminal,
                                        legal_columns, winner, winning_line)
from connect4_engine.game.session import GameSession
from connect4_engine.utils import ROWS, COLS, MoveOutcome, Player

# The evaluation gauge shows the AI's standing clamped to +/- GAUGE_LIMIT
GAUGE_LIMIT = 50
GAUGE_DEADBAND = 5
GAUGE_WIDTH = 20

QUIT = "quit"
RESTART = "restart"


def gauge_percentage(score: int) -> float:
    """Map an evaluation to 0..100, 50 being an even position."""
    clamped = max(-GAUGE_LIMIT, min(GAUGE_LIMIT, score))
    return (clamped + GAUGE_LIMIT) / (2 * GAUGE_LIMIT) * 100


def gauge_label(score: int) -> str:
    if score > GAUGE_DEADBAND:
        return "AI ahead"
    if score < -GAUGE_DEADBAND:
        return "Human ahead"
    return "Even"


def render_gauge(score: int) -> str:
    filled = round(gauge_percentage(score) / 100 * GAUGE_WIDTH)
    return f"[{'#' * filled}{'.' * (GAUGE_WIDTH - filled)}] {gauge_label(score)}"


def parse_position(position: str) -> Board:
    """
    Parse 42 comma-separated cell values (0 empty, 1 human, 2 AI).

    Cells are listed row by row starting from the bottom row, left to right.

    Raises:
        ValueError: On a malformed string or an impossible position
    """
    try:
        values = [int(c) for c in position.split(',')]
    except ValueError:
        raise ValueError(f"Position must contain integers only: {position!r}")
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    return Board.from_grid([values[row * COLS:(row + 1) * COLS] for row in range(ROWS)])


def random_position(rng: random.Random, min_moves: int = 4, max_moves: int = 20) -> Board:
    """Random non-terminal position reached by legal alternating moves."""
    while True:
        board = Board()
        player = Player.HUMAN
        for _ in range(rng.randint(min_moves, max_moves)):
            apply_move(board, rng.choice(legal_columns(board)), player)
            player = player.other()
            if is_terminal(board):
                break
        if not is_terminal(board):
            return board


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self):
        self.session: Optional[GameSession] = None
        self.args = None
        self.rng = random.Random()

    def parse_args(self, argv: Optional[Sequence[str]] = None) -> None:
        """Parse command-line arguments and apply the logging options."""
        parser = argparse.ArgumentParser(
            description='Connect Four against a minimax computer opponent')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode with detailed logging')
        parser.add_argument('--debug_level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (ignored with --debug)')
        parser.add_argument('--log_file', default=None, help='Also write logs to this file')
        parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                            help='Search depth of the AI in plies')
        parser.add_argument('--seed', type=int, default=None,
                            help='Seed for the AI tie-breaks and random positions')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--delay', type=float, default=0.5,
                                 help='Pause in seconds before the AI replies')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help='42 comma-separated cells, bottom row first')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the search')
        benchmark_parser.add_argument('--iterations', type=int, default=20,
                                      help='Number of random positions to search')

        self.args = parser.parse_args(argv)
        if self.args.depth < 1:
            parser.error("--depth must be at least 1")

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        self.rng = random.Random(self.args.seed)

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the CLI. Returns the process exit code."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game against the AI until it ends or the player quits."""
        print("Starting a new Connect Four game! You are X, the computer is O.")
        print(f"Enter a column number (0-{COLS - 1}); 'q' quits, 'r' restarts.")

        self.session = GameSession(depth=self.args.depth, rng=self.rng)
        self.show_board()

        while not self.session.is_over():
            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == RESTART:
                self.session.reset_game()
                print("Game restarted.")
                self.show_board()
                continue

            try:
                outcome = self.session.submit_human_move(move)
            except IllegalMoveError as exc:
                print(f"Invalid move: {exc}")
                continue
            self.show_board()
            if outcome.is_game_over():
                break

            print("AI is thinking...")
            time.sleep(self.args.delay)
            self.session.play_ai_turn()
            _, _, column = self.session.history[-1]
            print(f"AI plays column {column}")
            self.show_board()

        self.announce(self.session.outcome())

    def get_human_move(self):
        """
        Read one line of input.

        Returns:
            A column index, QUIT, RESTART, or None if the input was unusable
        """
        try:
            user_input = input(f"Your move (columns 0-{COLS - 1}, q/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART
        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

    def show_board(self) -> None:
        board = self.session.board
        won_by = self.session.winner()
        print(board.render(winning_line(board, won_by) if won_by else None))
        print(f"Evaluation: {render_gauge(self.session.current_evaluation())}")

    @staticmethod
    def announce(outcome: MoveOutcome) -> None:
        print("Game over!")
        if outcome == MoveOutcome.HUMAN_WIN:
            print("You win! Congratulations!")
        elif outcome == MoveOutcome.AI_WIN:
            print("AI wins! Better luck next time.")
        else:
            print("It's a draw!")

    def analyze_position(self) -> int:
        """Print status, evaluation and the AI's choice for a position."""
        try:
            board = parse_position(self.args.position)
        except ValueError as exc:
            print(f"Error parsing position: {exc}")
            return 1

        print("Loaded position:")
        print(board.render())

        for player in (Player.HUMAN, Player.AI):
            if check_win(board, player):
                print(f"Win for {player.name} along {winning_line(board, player)}")
        if winner(board) is None:
            print("No win detected for any player")

        if is_full(board):
            print("Board is full")
        else:
            print(f"Empty spaces: {ROWS * COLS - board.move_count()}")
        print(f"Valid moves: {legal_columns(board)}")

        for player in (Player.HUMAN, Player.AI):
            print(f"Evaluation for {player.name}: {score_position(board, player)}")

        if not is_terminal(board):
            ai = MinimaxPlayer(depth=self.args.depth, rng=self.rng)
            result = ai.analyze(board)
            verdict = ""
            if result.score >= WIN_SCORE:
                verdict = " (forced win)"
            elif result.score <= -WIN_SCORE:
                verdict = " (forced loss)"
            print(f"AI would play column {result.column}, score {result.score}{verdict}, "
                  f"{ai.nodes_evaluated} nodes searched")
        return 0

    def benchmark(self) -> List[Tuple[float, int]]:
        """
        Time the AI's search on random positions.

        Returns:
            (seconds, nodes) per iteration
        """
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} positions at depth {self.args.depth}...")
        ai = MinimaxPlayer(depth=self.args.depth, rng=self.rng)
        samples = []
        for _ in range(iterations):
            board = random_position(self.rng)
            started = time.perf_counter()
            ai.get_move(board)
            samples.append((time.perf_counter() - started, ai.nodes_evaluated))

        if samples:
            total_time = sum(elapsed for elapsed, _ in samples)
            total_nodes = sum(nodes for _, nodes in samples)
            print(f"Searched {iterations} positions: {total_time:.3f} seconds total, "
                  f"{total_time / iterations * 1000:.2f} ms per move, "
                  f"{total_nodes / iterations:.0f} nodes per move")
        return samples


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
