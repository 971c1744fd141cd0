"""
Move directions for the 2048 engine, and helpers telling which of them would change a grid.
"""

from enum import Enum

from numpy import ndarray


class Direction(str, Enum):
    """
    The four logical move directions.

    The ``action`` index is the number of counter-clockwise quarter turns that bring the direction onto a
    left slide (0: left, 1: up, 2: right, 3: down).
    """

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'

    @property
    def action(self) -> int:
        return _ACTION_INDEX[self]


_ACTION_INDEX = {Direction.LEFT: 0, Direction.UP: 1, Direction.RIGHT: 2, Direction.DOWN: 3}

# ##>: Lookup by action index, as used by the rotation-based move algorithm.
ACTIONS = {index: direction for direction, index in _ACTION_INDEX.items()}


def as_direction(direction: 'Direction | str | int') -> Direction:
    """
    Normalise a direction given as enum member, name or action index.

    Parameters
    ----------
    direction : Direction | str | int
        ``Direction.UP``, ``'up'`` or ``1`` all denote the same move.

    Returns
    -------
    Direction
        The matching enum member.

    Raises
    ------
    ValueError
        If the value names no direction.
    """
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str):
        return Direction(direction.lower())
    if isinstance(direction, int) and direction in ACTIONS:
        return ACTIONS[direction]
    raise ValueError(f'Unknown direction: {direction!r}')


def legal_moves_mask(grid: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask of the directions that would change the grid.

    Parameters
    ----------
    grid : ndarray
        The 4x4 game grid.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down).

    Notes
    -----
    A direction is legal when some tile has an empty cell on its side of motion, or when two adjacent
    non-empty tiles on that axis share a value.
    """
    left_cols, right_cols = grid[:, :-1], grid[:, 1:]
    top_rows, bottom_rows = grid[:-1, :], grid[1:, :]

    # ##>: A merge is possible in both directions of an axis.
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def legal_moves(grid: ndarray) -> list[Direction]:
    """List the directions that would change the grid, in action-index order."""
    mask = legal_moves_mask(grid)
    return [ACTIONS[index] for index in range(4) if mask[index]]


def can_move(grid: ndarray, direction: 'Direction | str | int') -> bool:
    """Check whether moving in ``direction`` would change the grid."""
    return legal_moves_mask(grid)[as_direction(direction).action]
