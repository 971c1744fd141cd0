"""
Swipe gesture classification.

A gesture is reduced to its displacement between press and release; the dominant axis decides the direction.
"""

from tilegrid.config import DEFAULT_CONFIG
from tilegrid.core import Direction

# ##>: Minimum gesture length, in the front-end's units.
DEFAULT_THRESHOLD = DEFAULT_CONFIG.swipe_threshold


def classify_swipe(dx: float, dy: float, threshold: float = DEFAULT_THRESHOLD) -> Direction | None:
    """
    Classify a gesture displacement as a move direction.

    Parameters
    ----------
    dx : float
        Horizontal displacement, positive towards the right.
    dy : float
        Vertical displacement in screen coordinates, positive downwards.
    threshold : float, optional
        Minimum displacement along the dominant axis, by default 50.

    Returns
    -------
    Direction | None
        The direction, or None when the gesture is too short.

    Notes
    -----
    The horizontal axis wins only when its displacement is strictly larger; ties go to the vertical axis.
    """
    abs_x, abs_y = abs(dx), abs(dy)
    if max(abs_x, abs_y) < threshold:
        return None

    if abs_x > abs_y:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class SwipeTracker:
    """
    Accumulate pointer positions of one gesture and classify it on release.

    Parameters
    ----------
    threshold : float, optional
        Minimum gesture length.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold
        self._start: tuple[float, float] | None = None
        self._end: tuple[float, float] | None = None

    @property
    def in_progress(self) -> bool:
        return self._start is not None

    def press(self, x: float, y: float) -> None:
        """Start a gesture."""
        self._start = (x, y)
        self._end = (x, y)

    def drag(self, x: float, y: float) -> None:
        """Record the latest pointer position; ignored outside a gesture."""
        if self._start is not None:
            self._end = (x, y)

    def release(self) -> Direction | None:
        """End the gesture and return its direction, if any."""
        if self._start is None or self._end is None:
            return None
        (start_x, start_y), (end_x, end_y) = self._start, self._end
        self._start = self._end = None
        return classify_swipe(end_x - start_x, end_y - start_y, self.threshold)
