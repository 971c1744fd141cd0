from unittest import TestCase, main

from numpy import array

from tilegrid.core import ACTIONS, Direction, as_direction, can_move, legal_moves


class TestDirection(TestCase):
    def test_as_direction_accepts_names_indices_and_members(self):
        """
        Test that every spelling of a direction resolves to the same member.
        """
        self.assertIs(as_direction('up'), Direction.UP)
        self.assertIs(as_direction('UP'), Direction.UP)
        self.assertIs(as_direction(1), Direction.UP)
        self.assertIs(as_direction(Direction.UP), Direction.UP)

    def test_as_direction_rejects_unknown_values(self):
        """
        Test that unknown directions raise.
        """
        with self.assertRaises(ValueError):
            as_direction(4)
        with self.assertRaises(ValueError):
            as_direction('sideways')

    def test_action_indices(self):
        """
        Test the rotation indices of each direction.
        """
        self.assertEqual([ACTIONS[index] for index in range(4)], [Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN])
        self.assertEqual(Direction.DOWN.action, 3)


class TestLegalMoves(TestCase):
    def test_legal_moves(self):
        """
        Test if legal moves are correctly identified.
        """
        board = array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(set(legal_moves(board)), {Direction.UP, Direction.RIGHT, Direction.DOWN})

    def test_can_move(self):
        """
        Test single-direction checks.
        """
        board = array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertFalse(can_move(board, 'left'))
        self.assertTrue(can_move(board, Direction.UP))

    def test_no_legal_moves_on_terminal_board(self):
        """
        Test that a terminal board has no legal moves.
        """
        board = array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4], [2, 8, 16, 32]])
        self.assertEqual(legal_moves(board), [])


if __name__ == '__main__':
    main()
