"""
Conversion between a ``SessionSnapshot`` and its JSON-compatible record.

Record layout (version 1)::

    {
        "version": 1,
        "grid": [[0, 2, 0, 0], ...],
        "score": 0,
        "last_spawn": [0, 1] | null,
        "milestones": {"64": false, ..., "2048": false},
        "history": [{"grid": [[...]], "score": 0, "last_spawn": [r, c] | null}, ...],
        "animations": true
    }

``history`` is stored newest first. ``game_over`` is not stored; it is derived from the grid on load.
"""

from typing import Any

from numpy import asarray, int64, ndarray

from tilegrid.config import DEFAULT_CONFIG, GameConfig
from tilegrid.core import BOARD_SIZE, GameState, Position, freeze_grid, is_terminal, is_valid_tile
from tilegrid.session import HistoryEntry, MoveHistory, SessionSnapshot

FORMAT_VERSION = 1

# ##>: Largest tile an int64 grid can hold.
MAX_TILE = 2**62


class SnapshotError(ValueError):
    """Raised when a persisted record cannot be turned back into a session."""


def encode_snapshot(snapshot: SessionSnapshot, config: GameConfig = DEFAULT_CONFIG) -> dict[str, Any]:
    """
    Encode a session snapshot as a JSON-compatible dictionary.

    Parameters
    ----------
    snapshot : SessionSnapshot
        The session to encode.
    config : GameConfig, optional
        Supplies the milestone values written out as flags.

    Returns
    -------
    dict[str, Any]
        The record described in the module docstring.
    """
    state = snapshot.state
    return {
        'version': FORMAT_VERSION,
        'grid': _encode_grid(state.grid),
        'score': int(state.score),
        'last_spawn': _encode_position(state.last_spawn),
        'milestones': {str(value): value in state.milestones for value in config.milestone_values},
        'history': [
            {'grid': _encode_grid(entry.grid), 'score': int(entry.score), 'last_spawn': _encode_position(entry.last_spawn)}
            for entry in snapshot.history
        ],
        'animations': bool(snapshot.animations),
    }


def decode_snapshot(record: Any, config: GameConfig = DEFAULT_CONFIG) -> SessionSnapshot:
    """
    Decode a record produced by ``encode_snapshot``.

    Parameters
    ----------
    record : Any
        Parsed JSON data.
    config : GameConfig, optional
        Supplies the history capacity and the known milestone values.

    Returns
    -------
    SessionSnapshot
        The restored session.

    Raises
    ------
    SnapshotError
        If any field is missing or violates the engine invariants.
    """
    if not isinstance(record, dict):
        raise SnapshotError(f'Snapshot must be an object, got {type(record).__name__}')

    version = record.get('version', FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise SnapshotError(f'Unsupported snapshot version: {version!r}')

    grid = _decode_grid(_require(record, 'grid'))
    milestones = _decode_milestones(record.get('milestones', {}), config)

    raw_history = record.get('history', [])
    if not isinstance(raw_history, list):
        raise SnapshotError('history must be a list')
    if len(raw_history) > config.history_capacity:
        raise SnapshotError(f'history holds {len(raw_history)} entries, capacity is {config.history_capacity}')

    entries = []
    for raw_entry in raw_history:
        if not isinstance(raw_entry, dict):
            raise SnapshotError('history entries must be objects')
        entries.append(
            HistoryEntry(
                grid=freeze_grid(_decode_grid(_require(raw_entry, 'grid'))),
                score=_decode_score(_require(raw_entry, 'score')),
                last_spawn=_decode_position(raw_entry.get('last_spawn')),
            )
        )

    state = GameState(
        grid=grid,
        score=_decode_score(_require(record, 'score')),
        game_over=is_terminal(grid),
        last_spawn=_decode_position(record.get('last_spawn')),
        milestones=milestones,
    )

    animations = record.get('animations', True)
    if not isinstance(animations, bool):
        raise SnapshotError('animations must be a boolean')

    return SessionSnapshot(state=state, history=MoveHistory(config.history_capacity, entries), animations=animations)


def _require(record: dict, key: str) -> Any:
    if key not in record:
        raise SnapshotError(f'Missing field: {key}')
    return record[key]


def _encode_grid(grid: ndarray) -> list[list[int]]:
    return asarray(grid, dtype=int64).tolist()


def _encode_position(position: Position | None) -> list[int] | None:
    return None if position is None else [int(position[0]), int(position[1])]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_grid(raw: Any) -> ndarray:
    if not isinstance(raw, list) or len(raw) != BOARD_SIZE:
        raise SnapshotError(f'grid must be a list of {BOARD_SIZE} rows')
    for row in raw:
        if not isinstance(row, list) or len(row) != BOARD_SIZE:
            raise SnapshotError(f'grid rows must hold {BOARD_SIZE} cells')
        for cell in row:
            if not _is_int(cell) or cell > MAX_TILE or not is_valid_tile(cell):
                raise SnapshotError(f'Invalid tile value: {cell!r}')
    return asarray(raw, dtype=int64)


def _decode_score(raw: Any) -> int:
    if not _is_int(raw) or raw < 0:
        raise SnapshotError(f'Invalid score: {raw!r}')
    return raw


def _decode_position(raw: Any) -> Position | None:
    if raw is None:
        return None
    if (
        not isinstance(raw, (list, tuple))
        or len(raw) != 2
        or not all(_is_int(index) and 0 <= index < BOARD_SIZE for index in raw)
    ):
        raise SnapshotError(f'Invalid position: {raw!r}')
    return int(raw[0]), int(raw[1])


def _decode_milestones(raw: Any, config: GameConfig) -> frozenset[int]:
    if not isinstance(raw, dict):
        raise SnapshotError('milestones must be an object')
    reached = set()
    for key, flag in raw.items():
        if not isinstance(flag, bool):
            raise SnapshotError(f'Milestone flag for {key!r} must be a boolean')
        try:
            value = int(key)
        except ValueError as error:
            raise SnapshotError(f'Invalid milestone key: {key!r}') from error
        if flag and value in config.milestone_values:
            reached.add(value)
    return frozenset(reached)
