"""Session orchestration for the 2048 engine."""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple

from tilegrid.config import DEFAULT_CONFIG, GameConfig
from tilegrid.core import Direction, GameState, apply_move, is_terminal, make_rng, spawn_tile
from tilegrid.core.gameboard import EntropySource
from tilegrid.session.events import GAME_OVER, new_milestones
from tilegrid.session.history import MoveHistory, record_snapshot, undo

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class Transition(NamedTuple):
    """
    Result of a move request.

    Attributes
    ----------
    state : GameState
        State after the request.
    history : MoveHistory
        History after the request.
    moved : bool
        Whether the grid changed; when False, state and history are the ones passed in.
    score_gained : int
        Score earned by merges during the move.
    events : list[str]
        Derived events such as ``milestone:512`` or ``game_over``.
    """

    state: GameState
    history: MoveHistory
    moved: bool
    score_gained: int
    events: list[str]


class SessionSnapshot(NamedTuple):
    """Everything a session needs to be persisted and restored."""

    state: GameState
    history: MoveHistory
    animations: bool = True


def new_game(config: GameConfig = DEFAULT_CONFIG, rng: EntropySource | None = None) -> GameState:
    """
    Create a fresh game.

    Parameters
    ----------
    config : GameConfig, optional
        Game configuration.
    rng : EntropySource, optional
        Source of randomness for the initial spawns.

    Returns
    -------
    GameState
        An empty grid with ``config.initial_tiles`` spawned tiles, zero score and no milestones.
    """
    state = GameState.initial()
    grid, position = state.grid, None
    for _ in range(config.initial_tiles):
        grid, position = spawn_tile(grid, rng=rng, probabilities=config.spawn_probabilities)

    milestones, _ = new_milestones(grid, frozenset(), config.milestone_values)
    return GameState(grid=grid, last_spawn=position, game_over=is_terminal(grid), milestones=milestones)


def play_move(
    state: GameState,
    history: MoveHistory,
    direction: Direction | str | int,
    rng: EntropySource | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> Transition:
    """
    Apply a move request: move, then spawn and re-check the end of the game if anything moved.

    Parameters
    ----------
    state : GameState
        The current state. It is not modified.
    history : MoveHistory
        The current undo history. It is not modified.
    direction : Direction | str | int
        The requested move.
    rng : EntropySource, optional
        Source of randomness for the spawn.
    config : GameConfig, optional
        Game configuration.

    Returns
    -------
    Transition
        The new state, history, move flag, score gained and events.

    Notes
    -----
    - A finished game ignores move requests.
    - A move that changes nothing records no snapshot and spawns nothing.
    """
    if state.game_over:
        return Transition(state, history, False, 0, [])

    result = apply_move(state.grid, direction)
    if not result.moved:
        return Transition(state, history, False, 0, [])

    # ##: Snapshot the pre-move state, so one undo reverses both merge and spawn.
    history = record_snapshot(history, state)

    grid, position = spawn_tile(result.grid, rng=rng, probabilities=config.spawn_probabilities)
    milestones, events = new_milestones(grid, state.milestones, config.milestone_values)
    game_over = is_terminal(grid)
    if game_over:
        events.append(GAME_OVER)

    new_state = GameState(
        grid=grid,
        score=state.score + result.score_gained,
        game_over=game_over,
        last_spawn=position,
        milestones=milestones,
    )
    return Transition(new_state, history, True, result.score_gained, events)


class GameSession:
    """
    One game owned by a single front-end.

    The session keeps the current state, its undo history and its random generator. Requests are serialised
    with a lock so that a move, its spawn and the end-of-game check are never interleaved with another request.

    Parameters
    ----------
    config : GameConfig, optional
        Game configuration.
    rng : EntropySource, optional
        Source of randomness; by default a generator seeded with ``seed``.
    seed : int, optional
        Seed used when no ``rng`` is given.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: EntropySource | None = None, seed: int | None = None):
        self.config = config
        self.animations = config.animations
        self._rng = rng if rng is not None else make_rng(seed)
        self._lock = threading.Lock()
        self._state = GameState.initial()
        self._history = MoveHistory(config.history_capacity)
        self.reset()

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def history(self) -> MoveHistory:
        """Current undo history."""
        return self._history

    @property
    def can_undo(self) -> bool:
        """Whether an undo step is available."""
        return bool(self._history)

    def reset(self, seed: int | None = None) -> GameState:
        """
        Start a new game: empty grid, zero score, empty history, then the initial spawns.

        Parameters
        ----------
        seed : int, optional
            Reseed the session generator before spawning.

        Returns
        -------
        GameState
            The new state.
        """
        with self._lock:
            if seed is not None:
                self._rng = make_rng(seed)
            self._state = new_game(self.config, self._rng)
            self._history = MoveHistory(self.config.history_capacity)
            _logger.info('New game started')
            return self._state

    def step(self, direction: Direction | str | int) -> Transition:
        """
        Apply a move request to the session.

        Parameters
        ----------
        direction : Direction | str | int
            The requested move.

        Returns
        -------
        Transition
            See ``play_move``.
        """
        with self._lock:
            transition = play_move(self._state, self._history, direction, rng=self._rng, config=self.config)
            self._state, self._history = transition.state, transition.history
            if transition.moved:
                _logger.debug('Moved %s: +%d, score %d', direction, transition.score_gained, self._state.score)
            if self._state.game_over and transition.moved:
                _logger.info('Game over with score %d', self._state.score)
            return transition

    def undo(self) -> bool:
        """
        Undo the newest move.

        Returns
        -------
        bool
            True if a move was undone, False if the history was empty.
        """
        with self._lock:
            restored = undo(self._history, self._state)
            if restored is None:
                return False
            self._state, self._history = restored
            return True

    def to_snapshot(self) -> SessionSnapshot:
        """Capture the session for persistence."""
        with self._lock:
            return SessionSnapshot(state=self._state, history=self._history, animations=self.animations)

    def restore(self, snapshot: SessionSnapshot) -> None:
        """Replace the session state with a persisted snapshot."""
        with self._lock:
            self._state = snapshot.state
            self._history = MoveHistory(self.config.history_capacity, snapshot.history)
            self.animations = snapshot.animations

    @classmethod
    def from_snapshot(
        cls, snapshot: SessionSnapshot | None, config: GameConfig = DEFAULT_CONFIG, seed: int | None = None
    ) -> GameSession:
        """
        Build a session from a persisted snapshot, or a fresh game when there is none.

        Parameters
        ----------
        snapshot : SessionSnapshot | None
            Snapshot loaded by a store; None starts a new game.
        config : GameConfig, optional
            Game configuration.
        seed : int, optional
            Seed for the session generator.

        Returns
        -------
        GameSession
            The session.
        """
        session = cls(config=config, seed=seed)
        if snapshot is not None:
            session.restore(snapshot)
        return session
