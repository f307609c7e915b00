import random
import unittest

import numpy as np

from connect4_engine.exceptions import IllegalMoveError
from connect4_engine.game.board import Board
from connect4_engine.game.rules import apply_move, drop_row, legal_columns
from connect4_engine.utils import ROWS, COLS, Player

from boards import board_with, gravity_holds, random_board


class TestBoard(unittest.TestCase):
    def test_new_board_is_empty(self):
        board = Board()
        self.assertEqual(board.grid.shape, (ROWS, COLS))
        self.assertEqual(board.move_count(), 0)
        self.assertEqual(legal_columns(board), list(range(COLS)))

    def test_pieces_stack_from_the_bottom(self):
        board = Board()
        self.assertEqual(drop_row(board, 3), 0)
        self.assertEqual(apply_move(board, 3, Player.HUMAN), 0)
        self.assertEqual(apply_move(board, 3, Player.AI), 1)
        self.assertEqual(board.cell(0, 3), Player.HUMAN)
        self.assertEqual(board.cell(1, 3), Player.AI)
        self.assertEqual(board.column_height(3), 2)
        self.assertEqual(drop_row(board, 3), 2)

    def test_full_column_is_rejected_without_mutation(self):
        board = Board.from_moves([0] * ROWS)
        before = board.get_state()

        self.assertIsNone(drop_row(board, 0))
        with self.assertRaises(IllegalMoveError) as ctx:
            apply_move(board, 0, Player.HUMAN)
        self.assertEqual(ctx.exception.column, 0)
        np.testing.assert_array_equal(board.grid, before)
        self.assertNotIn(0, legal_columns(board))

    def test_out_of_range_column_is_rejected(self):
        board = Board()
        for column in (-1, COLS):
            with self.assertRaises(IllegalMoveError):
                apply_move(board, column, Player.AI)
        self.assertEqual(board.move_count(), 0)

    def test_empty_player_cannot_move(self):
        with self.assertRaises(ValueError):
            Board().drop_piece(0, Player.EMPTY)

    def test_copy_is_independent(self):
        board = Board.from_moves([3, 3, 2])
        clone = board.copy()
        apply_move(clone, 4, Player.AI)

        self.assertEqual(board.move_count(), 3)
        self.assertEqual(clone.move_count(), 4)
        self.assertNotEqual(board, clone)

    def test_reset_clears_every_cell(self):
        board = Board.from_moves([0, 1, 2, 3, 4])
        board.reset()
        self.assertEqual(board, Board())

    def test_from_moves_alternates_players(self):
        board = Board.from_moves([2, 2, 5])
        self.assertEqual(board.cell(0, 2), Player.HUMAN)
        self.assertEqual(board.cell(1, 2), Player.AI)
        self.assertEqual(board.cell(0, 5), Player.HUMAN)

    def test_from_grid_rejects_floating_pieces(self):
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        grid[2, 4] = Player.HUMAN.value
        with self.assertRaises(ValueError):
            Board.from_grid(grid)

    def test_from_grid_rejects_bad_shape_and_values(self):
        with self.assertRaises(ValueError):
            Board.from_grid(np.zeros((COLS, ROWS)))
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        grid[0, 0] = 3
        with self.assertRaises(ValueError):
            Board.from_grid(grid)

    def test_legal_columns_match_empty_top_cells(self):
        rng = random.Random(11)
        for _ in range(50):
            board = random_board(rng, max_moves=40)
            expected = [col for col in range(COLS) if board.grid[ROWS - 1, col] == 0]
            self.assertEqual(legal_columns(board), expected)

    def test_gravity_holds_after_every_legal_move(self):
        rng = random.Random(5)
        for _ in range(30):
            board = Board()
            player = Player.HUMAN
            while legal_columns(board):
                apply_move(board, rng.choice(legal_columns(board)), player)
                player = player.other()
                self.assertTrue(gravity_holds(board))
            self.assertEqual(board.move_count(), ROWS * COLS)

    def test_render_puts_bottom_row_last(self):
        board = board_with({(0, 0): Player.HUMAN, (1, 0): Player.AI})
        lines = board.render().splitlines()
        self.assertEqual(lines[-3], "|X . . . . . .|")
        self.assertEqual(lines[-4], "|O . . . . . .|")
        self.assertEqual(lines[-1].split(), [str(col) for col in range(COLS)])


if __name__ == '__main__':
    unittest.main()
