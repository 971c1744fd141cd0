# -*- coding: utf-8 -*-
"""
This module maps front-end input (key presses and swipe gestures) onto engine directions and commands.
"""

from .keys import KEY_BINDINGS, Command, resolve_key
from .swipe import DEFAULT_THRESHOLD, SwipeTracker, classify_swipe

__all__ = ["KEY_BINDINGS", "Command", "DEFAULT_THRESHOLD", "SwipeTracker", "classify_swipe", "resolve_key"]
