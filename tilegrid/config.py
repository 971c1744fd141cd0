"""
Configuration for the 2048 tile-grid engine.

Every tunable constant of the engine lives here so that collaborators (front-ends, stores, tests) share one
source of truth.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration of a 2048 game session.

    Attributes are grouped by the component that reads them.
    """

    # ##>: Board parameters.
    size: int = 4  # Fixed 4x4 board
    initial_tiles: int = 2  # Tiles spawned on a new game

    # ##>: Spawn parameters (90% for 2, 10% for 4).
    spawn_probabilities: dict[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})

    # ##>: Undo history.
    history_capacity: int = 5  # Oldest entries dropped beyond this

    # ##>: Input surface.
    swipe_threshold: float = 50.0  # Minimum gesture length

    # ##>: Milestone tiles that emit an event the first time they appear.
    milestone_values: tuple[int, ...] = (64, 128, 256, 512, 1024, 2048)

    # ##>: Presentation flag persisted alongside the game.
    animations: bool = True

    def __post_init__(self):
        if self.size != 4:
            raise ValueError(f'Only 4x4 boards are supported, got size={self.size}')
        if self.history_capacity < 1:
            raise ValueError(f'history_capacity must be >= 1, got {self.history_capacity}')
        if abs(sum(self.spawn_probabilities.values()) - 1.0) > 1e-9:
            raise ValueError('spawn_probabilities must sum to 1')


DEFAULT_CONFIG = GameConfig()
