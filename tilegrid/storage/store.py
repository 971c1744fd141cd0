"""
File-backed persistence for game sessions.

Storage failures never propagate: saving reports failure through its return value and loading falls back to
None, so the caller keeps playing with its in-memory session.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from tilegrid.config import DEFAULT_CONFIG, GameConfig
from tilegrid.session import SessionSnapshot
from tilegrid.storage.codec import SnapshotError, decode_snapshot, encode_snapshot

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Persist session snapshots as JSON on disk.

    Attributes
    ----------
    path : Path
        File the snapshot is written to.
    config : GameConfig
        Configuration used to encode and validate snapshots.
    """

    def __init__(self, path: str | Path, config: GameConfig = DEFAULT_CONFIG):
        """
        Initialize the store.

        Parameters
        ----------
        path : str | Path
            Snapshot file. Its parent directory is created on first save.
        config : GameConfig, optional
            Game configuration.
        """
        self.path = Path(path)
        self.config = config

    def save(self, snapshot: SessionSnapshot) -> bool:
        """
        Write a snapshot, replacing the previous one atomically.

        Parameters
        ----------
        snapshot : SessionSnapshot
            The session to persist.

        Returns
        -------
        bool
            True on success, False if encoding or writing failed.
        """
        temporary = self.path.with_name(self.path.name + '.tmp')
        try:
            payload = json.dumps(encode_snapshot(snapshot, self.config))
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temporary.write_text(payload, encoding='utf-8')
            os.replace(temporary, self.path)
        except (OSError, TypeError, ValueError) as error:
            _logger.error('Failed to save snapshot to %s: %s', self.path, error)
            self._discard(temporary)
            return False

        _logger.debug('Saved snapshot to %s', self.path)
        return True

    def load(self) -> SessionSnapshot | None:
        """
        Read the stored snapshot.

        Returns
        -------
        SessionSnapshot | None
            The snapshot, or None when the file is missing, unreadable or malformed.
        """
        if not self.path.exists():
            return None

        try:
            record = json.loads(self.path.read_text(encoding='utf-8'))
        except OSError as error:
            _logger.error('Failed to read snapshot from %s: %s', self.path, error)
            return None
        except ValueError as error:
            _logger.warning('Ignoring unparsable snapshot %s: %s', self.path, error)
            return None

        try:
            return decode_snapshot(record, self.config)
        except SnapshotError as error:
            _logger.warning('Ignoring malformed snapshot %s: %s', self.path, error)
            return None

    def _discard(self, temporary: Path) -> None:
        """Remove a leftover temporary file after a failed save."""
        try:
            temporary.unlink(missing_ok=True)
        except OSError as error:
            _logger.error('Failed to remove temporary snapshot %s: %s', temporary, error)

    def clear(self) -> None:
        """Delete the stored snapshot, if any."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as error:
            _logger.error('Failed to delete snapshot %s: %s', self.path, error)
