"""
Scroll centroid history and the linearity/direction analysis run on it.
"""
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional, Sequence, Tuple

from .config import ScrollConfig
from .geometry import chord_deviation
from .types import GestureMode, Orientation, TrackedPoint


class TrajectoryHistory:
    """Bounded, time-ordered buffer of smoothed centroid samples."""

    def __init__(self, capacity: int = 50):
        self.capacity = capacity
        self._points: Deque[TrackedPoint] = deque(maxlen=capacity)

    def append(self, point: TrackedPoint) -> None:
        # deque drops the oldest sample once full
        self._points.append(point)

    def clear(self) -> None:
        self._points.clear()

    def snapshot(self) -> Tuple[TrackedPoint, ...]:
        """Read-only copy of the buffered samples, oldest first."""
        return tuple(self._points)

    def recent(self, n: int) -> Tuple[TrackedPoint, ...]:
        """The last n samples, oldest first."""
        if n <= 0:
            return ()
        start = max(0, len(self._points) - n)
        return tuple(self._points[i] for i in range(start, len(self._points)))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrackedPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> TrackedPoint:
        return self._points[index]


@dataclass
class MovementAnalysis:
    """Verdict of one analysis pass."""
    mode: GestureMode
    delta_y: float = 0.0
    dominant: Optional[Orientation] = None
    deviation: Optional[float] = None


def dominant_orientation(points: Sequence[TrackedPoint], ratio: float = 0.7) -> Optional[Orientation]:
    """
    Orientation held by more than `ratio` of the samples, if any.

    Args:
        points: Analysis window
        ratio: Required share of samples

    Returns:
        HORIZONTAL, VERTICAL or None when neither dominates
    """
    total = len(points)
    if total == 0:
        return None
    horizontal = sum(1 for p in points if p.orientation == Orientation.HORIZONTAL)
    vertical = sum(1 for p in points if p.orientation == Orientation.VERTICAL)

    if horizontal > total * ratio:
        return Orientation.HORIZONTAL
    if vertical > total * ratio:
        return Orientation.VERTICAL
    return None


def analyze_movement(history: Sequence[TrackedPoint], cfg: Optional[ScrollConfig] = None) -> MovementAnalysis:
    """
    Decide whether the recent trajectory is a deliberate scroll.

    The window (last `analysis_window` samples) must be dominated by one
    orientation and lie close to the chord between its end points; the
    mode is then SCROLLING. A delta is only reported when the net motion
    is mostly vertical, the latest step clears the dead zone and its
    sign matches the orientation: horizontal fingers scroll down only,
    vertical fingers scroll up only.

    Args:
        history: Full trajectory history, oldest first
        cfg: Scroll thresholds, defaults if None

    Returns:
        Mode and instantaneous delta for this frame
    """
    cfg = cfg or ScrollConfig()
    points = list(history)
    if len(points) < cfg.min_samples:
        return MovementAnalysis(mode=GestureMode.IDLE)

    recent = points[-cfg.analysis_window:]

    dominant = dominant_orientation(recent, cfg.orientation_dominance)
    if dominant is None:
        return MovementAnalysis(mode=GestureMode.IDLE)

    deviation = chord_deviation([(p.x, p.y) for p in recent])
    if deviation >= cfg.linearity_threshold:
        return MovementAnalysis(mode=GestureMode.IDLE, dominant=dominant, deviation=deviation)

    locked = MovementAnalysis(mode=GestureMode.SCROLLING, dominant=dominant, deviation=deviation)

    net_dx = recent[-1].x - recent[0].x
    net_dy = recent[-1].y - recent[0].y
    if abs(net_dy) <= abs(net_dx) * cfg.vertical_ratio:
        return locked

    # Latest step only, from the unclipped history
    dy = points[-1].y - points[-2].y
    if abs(dy) < cfg.dead_zone:
        return locked

    if dominant == Orientation.HORIZONTAL and dy > 0:
        locked.delta_y = dy
    elif dominant == Orientation.VERTICAL and dy < 0:
        locked.delta_y = dy
    return locked
