import unittest

from connect4_engine.game.board import Board
from connect4_engine.game.rules import (WINDOW_ROWS, check_win, is_full, is_terminal,
                                        legal_columns, window_values, winner, winning_line)
from connect4_engine.utils import Player

from boards import board_with, draw_grid

HUMAN, AI = Player.HUMAN, Player.AI


class TestWinDetection(unittest.TestCase):
    def test_horizontal(self):
        board = board_with({(0, 0): HUMAN, (0, 1): HUMAN, (0, 2): HUMAN, (0, 3): HUMAN,
                            (1, 0): AI, (1, 1): AI, (1, 2): AI})
        self.assertTrue(check_win(board, HUMAN))
        self.assertFalse(check_win(board, AI))
        self.assertEqual(winning_line(board, HUMAN), [(0, 0), (0, 1), (0, 2), (0, 3)])

    def test_vertical(self):
        board = board_with({(0, 5): AI, (1, 5): AI, (2, 5): AI, (3, 5): AI,
                            (0, 0): HUMAN, (0, 1): HUMAN, (0, 3): HUMAN})
        self.assertTrue(check_win(board, AI))
        self.assertFalse(check_win(board, HUMAN))
        self.assertEqual(sorted(winning_line(board, AI)), [(0, 5), (1, 5), (2, 5), (3, 5)])

    def test_ascending_diagonal(self):
        board = board_with({
            (0, 0): HUMAN, (1, 1): HUMAN, (2, 2): HUMAN, (3, 3): HUMAN,
            (0, 1): AI, (0, 2): AI, (1, 2): AI, (0, 3): AI, (1, 3): AI, (2, 3): AI,
        })
        self.assertTrue(check_win(board, HUMAN))
        self.assertFalse(check_win(board, AI))

    def test_descending_diagonal(self):
        board = board_with({
            (3, 0): HUMAN, (2, 1): HUMAN, (1, 2): HUMAN, (0, 3): HUMAN,
            (0, 0): AI, (1, 0): AI, (2, 0): AI, (0, 1): AI, (1, 1): AI, (0, 2): AI,
        })
        self.assertTrue(check_win(board, HUMAN))
        self.assertFalse(check_win(board, AI))
        self.assertEqual(sorted(winning_line(board, HUMAN)), [(0, 3), (1, 2), (2, 1), (3, 0)])

    def test_three_in_a_row_is_not_a_win(self):
        board = board_with({(0, 0): HUMAN, (0, 1): HUMAN, (0, 2): HUMAN,
                            (1, 0): AI, (1, 1): AI})
        self.assertFalse(check_win(board, HUMAN))
        self.assertEqual(winning_line(board, HUMAN), [])
        self.assertFalse(is_terminal(board))

    def test_longer_run_still_wins(self):
        board = Board.from_moves([0, 0, 1, 1, 2, 2, 4, 4, 3])
        self.assertTrue(check_win(board, HUMAN))

    def test_both_players_checked_independently(self):
        # Not reachable by legal play, but each side is still detected
        board = board_with({(0, c): HUMAN for c in range(4)} | {(1, c): AI for c in range(4)})
        self.assertTrue(check_win(board, HUMAN))
        self.assertTrue(check_win(board, AI))
        self.assertTrue(is_terminal(board))
        self.assertEqual(winner(board), HUMAN)

    def test_empty_player_is_rejected(self):
        with self.assertRaises(ValueError):
            check_win(Board(), Player.EMPTY)


class TestTerminal(unittest.TestCase):
    def test_empty_board(self):
        board = Board()
        self.assertFalse(is_full(board))
        self.assertFalse(is_terminal(board))
        self.assertIsNone(winner(board))

    def test_full_board_without_winner_is_a_draw(self):
        board = Board.from_grid(draw_grid())
        self.assertTrue(is_full(board))
        self.assertTrue(is_terminal(board))
        self.assertFalse(check_win(board, HUMAN))
        self.assertFalse(check_win(board, AI))
        self.assertEqual(legal_columns(board), [])

    def test_draw_board_has_equal_piece_counts(self):
        grid = draw_grid()
        self.assertEqual((grid == HUMAN.value).sum(), 21)
        self.assertEqual((grid == AI.value).sum(), 21)


class TestWindows(unittest.TestCase):
    def test_window_count(self):
        # 24 horizontal + 21 vertical + 12 + 12 diagonal
        self.assertEqual(len(WINDOW_ROWS), 69)
        self.assertEqual(window_values(Board()).shape, (69, 4))


if __name__ == '__main__':
    unittest.main()
