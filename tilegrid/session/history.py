# -*- coding: utf-8 -*-
"""
Bounded move history for undo.

The history is a fixed-capacity stack: pushing beyond capacity drops the oldest entry, popping returns the
newest. ``MoveHistory`` is used as a value; ``push`` and ``pop`` return new histories.
"""
from __future__ import annotations

import logging
from collections import deque
from itertools import islice
from typing import Iterator, NamedTuple

from numpy import array_equal, ndarray

from tilegrid.core import GameState, Position, freeze_grid, is_terminal

# ##>: Module logger.
_logger = logging.getLogger(__name__)

# ##>: Number of undo steps kept by default.
DEFAULT_CAPACITY = 5


class HistoryEntry(NamedTuple):
    """
    Pre-move snapshot of a game.

    Attributes
    ----------
    grid : ndarray
        Read-only grid before the move.
    score : int
        Score before the move.
    last_spawn : Position | None
        Last spawned cell before the move.
    """

    grid: ndarray
    score: int
    last_spawn: Position | None

    @classmethod
    def of(cls, state: GameState) -> HistoryEntry:
        """Capture the undo-relevant part of a state."""
        return cls(grid=freeze_grid(state.grid), score=state.score, last_spawn=state.last_spawn)

    def matches(self, other: HistoryEntry) -> bool:
        """Compare two entries cell by cell."""
        return array_equal(self.grid, other.grid) and self.score == other.score and self.last_spawn == other.last_spawn


class MoveHistory:
    """
    Undo stack of at most ``capacity`` entries, newest first.

    Parameters
    ----------
    capacity : int
        Maximum number of entries kept.
    entries : iterable of HistoryEntry, optional
        Initial entries, newest first. Entries beyond capacity are discarded from the old end.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, entries=()):
        if capacity < 1:
            raise ValueError(f'capacity must be >= 1, got {capacity}')
        self.capacity = capacity
        self._entries: deque[HistoryEntry] = deque(islice(entries, capacity), maxlen=capacity)

    def push(self, entry: HistoryEntry) -> MoveHistory:
        """Return a new history with ``entry`` as the newest element."""
        history = MoveHistory(self.capacity, self._entries)
        history._entries.appendleft(entry)
        return history

    def pop(self) -> tuple[HistoryEntry, MoveHistory] | None:
        """Return the newest entry and the history without it, or None when empty."""
        if not self._entries:
            return None
        history = MoveHistory(self.capacity, self._entries)
        entry = history._entries.popleft()
        return entry, history

    def peek(self) -> HistoryEntry | None:
        """Newest entry, without removing it."""
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MoveHistory):
            return NotImplemented
        return (
            self.capacity == other.capacity
            and len(self) == len(other)
            and all(mine.matches(theirs) for mine, theirs in zip(self, other))
        )

    def __repr__(self) -> str:
        return f'MoveHistory(capacity={self.capacity}, size={len(self)})'


def record_snapshot(history: MoveHistory, state: GameState) -> MoveHistory:
    """
    Record the state a move is about to be applied to.

    Parameters
    ----------
    history : MoveHistory
        The current history. It is not modified.
    state : GameState
        The pre-move state.

    Returns
    -------
    MoveHistory
        A new history with the snapshot prepended, capped at its capacity.
    """
    return history.push(HistoryEntry.of(state))


def undo(history: MoveHistory, state: GameState) -> tuple[GameState, MoveHistory] | None:
    """
    Restore the newest snapshot.

    Parameters
    ----------
    history : MoveHistory
        The current history. It is not modified.
    state : GameState
        The current state; its milestones carry over to the restored state.

    Returns
    -------
    tuple[GameState, MoveHistory] | None
        The restored state and the remaining history, or None if the history is empty.

    Notes
    -----
    Restoring a snapshot reverses both the merge and the spawn of the move it was taken before.
    """
    popped = history.pop()
    if popped is None:
        return None

    entry, remaining = popped
    restored = GameState(
        grid=entry.grid,
        score=entry.score,
        game_over=is_terminal(entry.grid),
        last_spawn=entry.last_spawn,
        milestones=state.milestones,
    )
    _logger.debug('Undo restored score %d, %d entries left', restored.score, len(remaining))
    return restored, remaining
