"""
Tests for the bounded undo history.
"""

from unittest import TestCase, main

import numpy as np

from tilegrid.core import GameState
from tilegrid.session import HistoryEntry, MoveHistory, record_snapshot, undo


def make_state(score: int, milestones=frozenset()) -> GameState:
    grid = np.zeros((4, 4), dtype=np.int64)
    grid[0, 0] = 2
    return GameState(grid=grid, score=score, last_spawn=(0, 0), milestones=milestones)


class TestMoveHistory(TestCase):
    """Fixed-capacity stack behaviour."""

    def test_capacity_is_never_exceeded(self):
        """Pushing eight snapshots keeps only the five newest."""
        history = MoveHistory(capacity=5)
        for score in range(8):
            history = record_snapshot(history, make_state(score))
            self.assertLessEqual(len(history), 5)

        # ##>: Newest first, oldest three dropped.
        self.assertEqual([entry.score for entry in history], [7, 6, 5, 4, 3])

    def test_push_returns_new_history(self):
        """Recording leaves the original history untouched."""
        history = MoveHistory()
        updated = record_snapshot(history, make_state(4))
        self.assertEqual(len(history), 0)
        self.assertEqual(len(updated), 1)
        self.assertFalse(history)
        self.assertTrue(updated)

    def test_pop_returns_newest(self):
        """Entries come back in reverse order of recording."""
        history = record_snapshot(record_snapshot(MoveHistory(), make_state(1)), make_state(2))
        entry, remaining = history.pop()
        self.assertEqual(entry.score, 2)
        self.assertEqual(remaining.peek().score, 1)
        self.assertEqual(len(history), 2)

    def test_pop_empty(self):
        """Popping an empty history gives None."""
        self.assertIsNone(MoveHistory().pop())
        self.assertIsNone(MoveHistory().peek())

    def test_smaller_capacity_keeps_newest(self):
        """Rebuilding a full history with a smaller capacity drops the oldest entries."""
        history = MoveHistory(capacity=5)
        for score in range(5):
            history = record_snapshot(history, make_state(score))

        shrunk = MoveHistory(3, history)
        self.assertEqual([entry.score for entry in shrunk], [4, 3, 2])

        # ##>: Pushing onto the rebuilt history still drops from the old end.
        shrunk = record_snapshot(shrunk, make_state(5))
        self.assertEqual([entry.score for entry in shrunk], [5, 4, 3])

    def test_invalid_capacity(self):
        """Capacity must be positive."""
        with self.assertRaises(ValueError):
            MoveHistory(capacity=0)

    def test_entries_compare_by_content(self):
        """Histories built from equal states are equal."""
        first = record_snapshot(MoveHistory(), make_state(3))
        second = record_snapshot(MoveHistory(), make_state(3))
        self.assertEqual(first, second)
        self.assertTrue(HistoryEntry.of(make_state(3)).matches(first.peek()))


class TestUndo(TestCase):
    """Restoring snapshots."""

    def test_undo_empty_history(self):
        """Undo with nothing recorded is a no-op reported as None."""
        self.assertIsNone(undo(MoveHistory(), make_state(0)))

    def test_undo_restores_snapshot(self):
        """Undo restores grid, score and last spawn of the newest entry."""
        before = make_state(12)
        history = record_snapshot(MoveHistory(), before)

        after = GameState(grid=np.full((4, 4), 0), score=40, last_spawn=(3, 3))
        restored, remaining = undo(history, after)

        self.assertEqual(restored, before)
        self.assertEqual(len(remaining), 0)

    def test_undo_can_be_repeated_until_exhausted(self):
        """Each undo consumes exactly one entry."""
        history = MoveHistory()
        for score in range(3):
            history = record_snapshot(history, make_state(score))

        state = make_state(99)
        scores = []
        restored = undo(history, state)
        while restored is not None:
            state, history = restored
            scores.append(state.score)
            restored = undo(history, state)
        self.assertEqual(scores, [2, 1, 0])

    def test_undo_keeps_reached_milestones(self):
        """Milestones record tiles that ever appeared and survive undo."""
        history = record_snapshot(MoveHistory(), make_state(0))
        restored, _ = undo(history, make_state(64, milestones=frozenset({64})))
        self.assertEqual(restored.milestones, frozenset({64}))


if __name__ == '__main__':
    main()
