"""
Events derived from state transitions.

Presentation layers react to these strings instead of being called from the engine.
"""

from typing import Iterable

from numpy import isin, ndarray

# ##>: Event names.
GAME_OVER = 'game_over'
MILESTONE_PREFIX = 'milestone:'


def milestone_event(value: int) -> str:
    """Event emitted the first time a tile of ``value`` appears, e.g. ``'milestone:512'``."""
    return f'{MILESTONE_PREFIX}{value}'


def reached_milestones(grid: ndarray, milestone_values: Iterable[int]) -> frozenset[int]:
    """Milestone values present on the grid."""
    values = list(milestone_values)
    present = isin(values, grid)
    return frozenset(value for value, found in zip(values, present) if found)


def new_milestones(
    grid: ndarray, already_reached: frozenset[int], milestone_values: Iterable[int]
) -> tuple[frozenset[int], list[str]]:
    """
    Compare the grid against the milestones already reached.

    Parameters
    ----------
    grid : ndarray
        Grid after the transition.
    already_reached : frozenset[int]
        Milestones reached before the transition.
    milestone_values : Iterable[int]
        Tile values that count as milestones.

    Returns
    -------
    reached : frozenset[int]
        All milestones reached so far.
    events : list[str]
        One ``milestone:<N>`` event per newly reached value, smallest first.
    """
    reached = reached_milestones(grid, milestone_values)
    fresh = sorted(reached - already_reached)
    return already_reached | reached, [milestone_event(value) for value in fresh]
