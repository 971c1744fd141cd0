"""Keyboard bindings from key names to engine commands."""

from enum import Enum

from tilegrid.core import Direction


class Command(str, Enum):
    """Non-move commands a front-end can route to the session."""

    UNDO = 'undo'
    NEW_GAME = 'new_game'
    QUIT = 'quit'


# ##>: Browser-style names, plotting-backend names and the terminal front-end's letters.
KEY_BINDINGS: dict[str, Direction | Command] = {
    'arrowleft': Direction.LEFT,
    'arrowup': Direction.UP,
    'arrowright': Direction.RIGHT,
    'arrowdown': Direction.DOWN,
    'left': Direction.LEFT,
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
    'a': Direction.LEFT,
    'w': Direction.UP,
    'd': Direction.RIGHT,
    's': Direction.DOWN,
    'backspace': Command.UNDO,
    'u': Command.UNDO,
    'n': Command.NEW_GAME,
    'escape': Command.QUIT,
    'q': Command.QUIT,
}


def resolve_key(key: str | None) -> Direction | Command | None:
    """
    Translate a key name into a move direction or a command.

    Parameters
    ----------
    key : str | None
        Key name as reported by the front-end, e.g. ``'ArrowUp'`` or ``'Backspace'``. Matching ignores case.

    Returns
    -------
    Direction | Command | None
        The bound direction or command, or None for an unbound key.
    """
    if not key:
        return None
    return KEY_BINDINGS.get(key.strip().lower())
