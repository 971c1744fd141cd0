"""
State containers for the 2048 engine.

A ``GameState`` is a value: its grid is a read-only ``ndarray`` and every engine operation returns a new state
instead of touching the one it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from numpy import array_equal, asarray, int64, ndarray, zeros

# ##>: Board geometry (the engine only supports 4x4).
BOARD_SIZE = 4

Position = tuple[int, int]


def empty_grid() -> ndarray:
    """Return a writable all-zero 4x4 grid."""
    return zeros((BOARD_SIZE, BOARD_SIZE), dtype=int64)


def freeze_grid(grid: ndarray) -> ndarray:
    """
    Return a read-only copy of a grid.

    Parameters
    ----------
    grid : ndarray
        Any 4x4 array-like of integers.

    Returns
    -------
    ndarray
        An ``int64`` copy with the ``writeable`` flag cleared.

    Raises
    ------
    ValueError
        If the grid is not 4x4.
    """
    frozen = asarray(grid, dtype=int64).copy()
    if frozen.shape != (BOARD_SIZE, BOARD_SIZE):
        raise ValueError(f'Grid must have shape ({BOARD_SIZE}, {BOARD_SIZE}), got {frozen.shape}')
    frozen.flags.writeable = False
    return frozen


def is_valid_tile(value: int) -> bool:
    """Check that a cell holds 0 or a power of two >= 2."""
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Snapshot of a running game.

    Attributes
    ----------
    grid : ndarray
        Read-only 4x4 board; ``0`` marks an empty cell.
    score : int
        Sum of all merged tile values so far.
    game_over : bool
        Whether the board has no legal move left.
    last_spawn : Position | None
        Cell of the most recently spawned tile, used to target spawn animations.
    milestones : frozenset[int]
        Milestone tile values already reached in this game. They record tiles that ever appeared, so they are
        session bookkeeping and take no part in equality.
    """

    grid: ndarray
    score: int = 0
    game_over: bool = False
    last_spawn: Position | None = None
    milestones: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self):
        # ##>: Bypass frozen to normalise the grid into a read-only private copy.
        object.__setattr__(self, 'grid', freeze_grid(self.grid))
        if self.last_spawn is not None:
            object.__setattr__(self, 'last_spawn', (int(self.last_spawn[0]), int(self.last_spawn[1])))
        object.__setattr__(self, 'milestones', frozenset(self.milestones))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            array_equal(self.grid, other.grid)
            and self.score == other.score
            and self.game_over == other.game_over
            and self.last_spawn == other.last_spawn
        )

    @classmethod
    def initial(cls) -> GameState:
        """Return the all-empty state a new game starts from before its first spawns."""
        return cls(grid=empty_grid())

    def evolve(self, **changes) -> GameState:
        """Return a copy of this state with the given fields replaced."""
        return replace(self, **changes)
