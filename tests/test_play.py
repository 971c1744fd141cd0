"""
Tests for the terminal front-end.
"""

import io
from contextlib import redirect_stdout
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase, main

import numpy as np

from tilegrid.core import GameState
from tilegrid.play import build_parser, handle_command, render
from tilegrid.session import GameSession
from tilegrid.storage import SnapshotStore


class TestPlay(TestCase):
    def setUp(self):
        self.session = GameSession(seed=10)
        self.output = io.StringIO()

    def test_render_shows_score(self):
        """
        Test that the board is drawn with its score line.
        """
        text = render(self.session.state, can_undo=False)
        lines = text.splitlines()
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[4], 'score=0')
        self.assertTrue(lines[5].startswith('moves='))

    def test_render_lists_legal_moves(self):
        """
        Test that only the directions that change the board are listed.
        """
        grid = np.zeros((4, 4), dtype=np.int64)
        grid[0, 0] = 2
        grid[1, 0] = 4
        lines = render(GameState(grid=grid), can_undo=False).splitlines()
        self.assertEqual(lines[-1], 'moves=right, down')

    def test_blocked_move_is_reported(self):
        """
        Test that a move which changes nothing is refused before reaching the session.
        """
        grid = np.zeros((4, 4), dtype=np.int64)
        grid[0, 0] = 2
        self.session.restore(self.session.to_snapshot()._replace(state=GameState(grid=grid)))

        with redirect_stdout(self.output):
            self.assertTrue(handle_command(self.session, None, 'a'))
        self.assertIn('cannot move left', self.output.getvalue())
        self.assertFalse(self.session.can_undo)

    def test_quit(self):
        """
        Test that q stops the loop.
        """
        self.assertFalse(handle_command(self.session, None, 'q'))

    def test_unknown_key_prints_help(self):
        """
        Test that an unbound key keeps the loop running.
        """
        with redirect_stdout(self.output):
            self.assertTrue(handle_command(self.session, None, 'x'))
        self.assertIn('Moves', self.output.getvalue())

    def test_undo_with_empty_history(self):
        """
        Test that undo with nothing to undo is reported, not raised.
        """
        with redirect_stdout(self.output):
            self.assertTrue(handle_command(self.session, None, 'u'))
        self.assertIn('nothing to undo', self.output.getvalue())

    def test_moves_are_saved(self):
        """
        Test that every command persists the session.
        """
        with TemporaryDirectory() as directory:
            store = SnapshotStore(Path(directory) / 'state.json')
            with redirect_stdout(self.output):
                for key in ('a', 'w', 'd', 's'):
                    handle_command(self.session, store, key)

            loaded = store.load()
            self.assertEqual(loaded.state, self.session.state)

    def test_parser_defaults(self):
        """
        Test the command line defaults.
        """
        args = build_parser().parse_args([])
        self.assertIsNone(args.state_file)
        self.assertIsNone(args.seed)
        self.assertEqual(args.log_level, 'WARNING')


if __name__ == '__main__':
    main()
