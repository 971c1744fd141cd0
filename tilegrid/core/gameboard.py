"""
Core functionality of the 2048 engine: sliding and merging, spawning tiles and detecting the end of a game.

Every function treats its input grid as read-only and returns a new grid.
"""

from typing import NamedTuple, Protocol

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array_equal, asarray, int64, ndarray, rot90, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

from tilegrid.core.gamemove import Direction, as_direction
from tilegrid.core.state import Position, freeze_grid

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator, the single entropy source unless one is injected.
_GENERATOR = default_rng(PCG64DXSM())


class EntropySource(Protocol):
    """The subset of ``numpy.random.Generator`` the spawn step draws from."""

    def integers(self, high: int) -> int: ...

    def random(self) -> float: ...


class MoveResult(NamedTuple):
    """Outcome of a directional move."""

    grid: ndarray
    moved: bool
    score_gained: int


class SpawnResult(NamedTuple):
    """Outcome of a spawn; ``position`` is None when the grid was full."""

    grid: ndarray
    position: Position | None


def make_rng(seed: int | None = None) -> Generator:
    """
    Return a random generator for spawning tiles.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility. Without it the shared module-level generator is returned.

    Returns
    -------
    Generator
        A NumPy generator.
    """
    return default_rng(seed) if seed is not None else _GENERATOR


def merge_line(line: ndarray) -> tuple[int, ndarray]:
    """
    Slide a single line towards index 0 and merge equal neighbours.

    Parameters
    ----------
    line : ndarray
        A 1D array holding one row or column, oriented so that index 0 is the edge tiles move towards.

    Returns
    -------
    score : int
        Sum of the values created by merges.
    merged_line : ndarray
        The new line, same length as the input.

    Notes
    -----
    - Tiles are resolved from the leading edge inward, so ``[2, 2, 2, 0]`` becomes ``[4, 2, 0, 0]``.
    - A cell produced by a merge is flagged and cannot merge again during the same call, so
      ``[2, 2, 4, 0]`` becomes ``[4, 4, 0, 0]`` and not ``[8, 0, 0, 0]``.
    """
    result = asarray(line, dtype=int64).copy()
    merged = zeros(len(result), dtype=bool)
    score = 0

    for j in range(1, len(result)):
        if result[j] == 0:
            continue

        # ##: Slide towards the edge until a wall or an occupied cell.
        k = j
        while k > 0 and result[k - 1] == 0:
            result[k - 1], result[k] = result[k], 0
            k -= 1

        # ##: Merge with the tile ahead, once per target.
        if k > 0 and result[k - 1] == result[k] and not merged[k - 1]:
            result[k - 1] *= 2
            result[k] = 0
            merged[k - 1] = True
            score += int(result[k - 1])

    return score, result


def slide_and_merge(grid: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of the grid to the left and merge.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_grid : ndarray
        The grid after the left move.

    Notes
    -----
    Other directions rotate the grid before calling this function.
    """
    result = zeros(grid.shape, dtype=int64)
    score = 0

    for i, row in enumerate(grid):
        score_row, merged_row = merge_line(row)
        score += score_row
        result[i] = merged_row

    return score, result


def apply_move(grid: ndarray, direction: Direction | str | int) -> MoveResult:
    """
    Apply a directional move to a grid.

    Parameters
    ----------
    grid : ndarray
        The current grid. It is not modified.
    direction : Direction | str | int
        The move to apply (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    MoveResult
        The new read-only grid, whether any cell changed, and the score gained.

    Notes
    -----
    When nothing moves the returned grid equals the input and the score gained is 0.
    """
    action = as_direction(direction).action
    rotated = rot90(grid, k=action)
    score, updated = slide_and_merge(rotated)
    new_grid = rot90(updated, k=-action)

    if array_equal(new_grid, grid):
        return MoveResult(grid=freeze_grid(grid), moved=False, score_gained=0)
    return MoveResult(grid=freeze_grid(new_grid), moved=True, score_gained=score)


def empty_cells(grid: ndarray) -> list[Position]:
    """Positions of all empty cells, in row-major order."""
    return [(int(cell[0]), int(cell[1])) for cell in argwhere(grid == 0)]


def spawn_tile(
    grid: ndarray, rng: EntropySource | None = None, probabilities: dict[int, float] | None = None
) -> SpawnResult:
    """
    Place a new tile in a uniformly chosen empty cell.

    Parameters
    ----------
    grid : ndarray
        The current grid. It is not modified.
    rng : EntropySource, optional
        Source of randomness; defaults to the module-level generator.
    probabilities : dict[int, float], optional
        Tile value probabilities, by default ``TILE_SPAWN_PROBS``.

    Returns
    -------
    SpawnResult
        The new grid and the position of the spawned tile, or the unchanged grid and None on a full grid.

    Notes
    -----
    Exactly two draws are taken: ``integers`` for the cell and ``random`` for the value.
    """
    cells = empty_cells(grid)
    if not cells:
        return SpawnResult(grid=freeze_grid(grid), position=None)

    rng = rng if rng is not None else _GENERATOR
    probabilities = probabilities or TILE_SPAWN_PROBS

    position = cells[int(rng.integers(len(cells)))]
    value = _draw_value(float(rng.random()), probabilities)

    new_grid = asarray(grid, dtype=int64).copy()
    new_grid[position] = value
    return SpawnResult(grid=freeze_grid(new_grid), position=position)


def _draw_value(draw: float, probabilities: dict[int, float]) -> int:
    """Map a uniform draw in [0, 1) onto a tile value, smallest value first."""
    cumulative = 0.0
    values = sorted(probabilities)
    for value in values:
        cumulative += probabilities[value]
        if draw < cumulative:
            return value
    return values[-1]


def is_terminal(grid: ndarray) -> bool:
    """
    Check if the game has ended.

    Parameters
    ----------
    grid : ndarray
        The current grid.

    Returns
    -------
    bool
        True if no cell is empty and no two adjacent cells share a value.
    """
    return bool(
        np_all(grid != 0) and not np_any(grid[:-1] == grid[1:]) and not np_any(grid[:, :-1] == grid[:, 1:])
    )
