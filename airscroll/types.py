"""
Type definitions for the gesture scroll pipeline.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable


# One landmark as produced by the hand tracker: normalized x, y and relative depth z
Landmark = Tuple[float, float, float]


class GestureMode(str, Enum):
    """What the session is doing on the current frame."""
    IDLE = "idle"
    HAND_DETECTED = "hand-detected"
    SCROLLING = "scrolling"
    POINTING = "pointing"
    CLICKING = "clicking"
    TRANSITION = "transition"
    # Part of the vocabulary consumed by the UI; nothing produces it yet
    RESETTING = "resetting"


class Orientation(str, Enum):
    """Alignment of the index and middle fingertips."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    NEUTRAL = "neutral"


class PoseClass(str, Enum):
    """Per-frame classification of a landmark set."""
    NO_HAND = "no-hand"
    SCROLL = "scroll-pose"
    POINT = "point-pose"
    INDETERMINATE = "indeterminate-hand"


@dataclass(frozen=True)
class TrackedPoint:
    """One smoothed sample of the scroll centroid."""
    x: float
    y: float
    timestamp: float  # seconds, monotonic
    orientation: Orientation = Orientation.NEUTRAL


@dataclass
class ScrollCommand:
    """Command to scroll by a normalized delta (positive = scroll down)."""
    dy: float


@dataclass
class CursorCommand:
    """Command to move the cursor to mirrored, normalized coordinates."""
    x: float
    y: float


@dataclass
class ClickCommand:
    """Command to click at the current cursor position."""
    timestamp: float


@dataclass
class FrameResult:
    """Everything the controller decided for one frame."""
    mode: GestureMode
    pose: PoseClass
    scroll: Optional[ScrollCommand] = None
    cursor: Optional[CursorCommand] = None
    click: Optional[ClickCommand] = None
    orientation: Optional[Orientation] = None
    warming_up: bool = False
    in_transition: bool = False
    confidence: float = 0.0
    message: str = ""

    @property
    def scroll_delta(self) -> float:
        return self.scroll.dy if self.scroll is not None else 0.0


@runtime_checkable
class GestureSink(Protocol):
    """Synchronous callbacks invoked by the controller while a frame is processed."""

    def on_gesture_change(self, mode: GestureMode) -> None:
        ...

    def on_scroll(self, delta_y: float) -> None:
        ...

    def on_cursor_move(self, x: float, y: float) -> None:
        ...

    def on_click(self) -> None:
        ...

    def on_history_update(self, points: Sequence[TrackedPoint]) -> None:
        ...


@runtime_checkable
class ControllerProto(Protocol):
    """Abstract protocol for controllers that execute gesture commands."""

    async def scroll(self, dy: float) -> None:
        """Execute a scroll command with the given normalized delta."""
        ...

    async def move_cursor(self, x: float, y: float) -> None:
        """Move the cursor to normalized screen coordinates."""
        ...

    async def click(self) -> None:
        """Click at the current cursor position."""
        ...
