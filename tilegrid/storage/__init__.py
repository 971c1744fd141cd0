# -*- coding: utf-8 -*-
"""
This module persists game sessions: a JSON record codec and a file-backed store that never lets a storage
failure reach the game.
"""

from .codec import FORMAT_VERSION, SnapshotError, decode_snapshot, encode_snapshot
from .store import SnapshotStore

__all__ = ["FORMAT_VERSION", "SnapshotError", "SnapshotStore", "decode_snapshot", "encode_snapshot"]
