# -*- coding: utf-8 -*-
"""
This module ties the engine together into a playable game: bounded undo history, derived events and the
``GameSession`` that front-ends drive.
"""

from .controller import GameSession, SessionSnapshot, Transition, new_game, play_move
from .events import GAME_OVER, milestone_event, new_milestones, reached_milestones
from .history import DEFAULT_CAPACITY, HistoryEntry, MoveHistory, record_snapshot, undo

__all__ = [
    "DEFAULT_CAPACITY",
    "GAME_OVER",
    "GameSession",
    "HistoryEntry",
    "MoveHistory",
    "SessionSnapshot",
    "Transition",
    "milestone_event",
    "new_game",
    "new_milestones",
    "play_move",
    "reached_milestones",
    "record_snapshot",
    "undo",
]
