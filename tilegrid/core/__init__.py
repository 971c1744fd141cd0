# -*- coding: utf-8 -*-
"""
This module provides the 2048 engine: state containers, directional moves, tile spawning and game-over detection.

Every operation takes a grid or state and returns a new one; nothing passed in is mutated.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    MoveResult,
    SpawnResult,
    apply_move,
    empty_cells,
    is_terminal,
    make_rng,
    merge_line,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import ACTIONS, Direction, as_direction, can_move, legal_moves, legal_moves_mask
from .state import BOARD_SIZE, GameState, Position, empty_grid, freeze_grid, is_valid_tile

__all__ = [
    "ACTIONS",
    "BOARD_SIZE",
    "TILE_SPAWN_PROBS",
    "Direction",
    "GameState",
    "MoveResult",
    "Position",
    "SpawnResult",
    "apply_move",
    "as_direction",
    "can_move",
    "empty_cells",
    "empty_grid",
    "freeze_grid",
    "is_terminal",
    "is_valid_tile",
    "legal_moves",
    "legal_moves_mask",
    "make_rng",
    "merge_line",
    "slide_and_merge",
    "spawn_tile",
]
