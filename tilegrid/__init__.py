# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 tile-grid engine.

This package provides the pure engine (``tilegrid.core``), the session layer with undo and events
(``tilegrid.session``), input mapping (``tilegrid.controls``) and persistence (``tilegrid.storage``).
"""

from .config import DEFAULT_CONFIG, GameConfig
from .core import Direction, GameState, apply_move, is_terminal, spawn_tile
from .session import GameSession, MoveHistory, record_snapshot, undo

__all__ = [
    "DEFAULT_CONFIG",
    "Direction",
    "GameConfig",
    "GameSession",
    "GameState",
    "MoveHistory",
    "apply_move",
    "is_terminal",
    "record_snapshot",
    "spawn_tile",
    "undo",
]
