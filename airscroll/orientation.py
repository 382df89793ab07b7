"""
Fingertip orientation detection and flip debouncing.
"""
import logging
from typing import Optional, Sequence

from .config import OrientationConfig
from .types import Orientation

logger = logging.getLogger(__name__)


def detect_orientation(p1: Sequence[float], p2: Sequence[float], margin: float = 1.2) -> Orientation:
    """
    Classify how two fingertips are aligned.

    One axis has to dominate the other by `margin` before the pair reads
    as horizontal or vertical; everything near the diagonal is neutral.

    Args:
        p1: First point (x, y, ...)
        p2: Second point (x, y, ...)
        margin: Required ratio between the dominant and the other axis

    Returns:
        Orientation of the pair
    """
    dx = abs(p1[0] - p2[0])
    dy = abs(p1[1] - p2[1])

    if dx > dy * margin:
        return Orientation.HORIZONTAL
    if dy > dx * margin:
        return Orientation.VERTICAL
    return Orientation.NEUTRAL


class OrientationTracker:
    """
    Debounces orientation flips into a confirmed orientation.

    Neutral readings never change the confirmed orientation. The first
    non-neutral reading locks in without a transition; every later change
    opens a transition window during which scroll output is suppressed.
    """

    def __init__(self, cfg: Optional[OrientationConfig] = None):
        self.cfg = cfg or OrientationConfig()
        self.stable: Orientation = Orientation.NEUTRAL
        self.transition_start: Optional[float] = None

    def update(self, orientation: Orientation, t_now: float) -> bool:
        """
        Feed one instantaneous orientation reading.

        Args:
            orientation: Orientation detected on this frame
            t_now: Current timestamp in seconds

        Returns:
            True if this reading flipped a previously confirmed orientation
        """
        if orientation == Orientation.NEUTRAL or orientation == self.stable:
            return False

        flipped = self.stable != Orientation.NEUTRAL
        if flipped:
            self.transition_start = t_now
            logger.info(f"Orientation flip {self.stable.value} -> {orientation.value}")
        self.stable = orientation
        return flipped

    def in_transition(self, t_now: float) -> bool:
        """Whether the last flip happened less than transition_ms ago."""
        if self.transition_start is None:
            return False
        return (t_now - self.transition_start) * 1000 < self.cfg.transition_ms

    def reset(self) -> None:
        self.stable = Orientation.NEUTRAL
        self.transition_start = None
