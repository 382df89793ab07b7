"""
Mock controller and recording sink for testing gesture commands.
"""
import logging
from typing import List, Sequence, Tuple

from .types import ControllerProto, GestureMode, TrackedPoint

logger = logging.getLogger(__name__)


class MockController:
    """Mock controller that logs actions instead of executing them."""

    def __init__(self):
        """Initialize the mock controller."""
        self.scroll_count = 0
        self.cursor_count = 0
        self.click_count = 0

    async def scroll(self, dy: float) -> None:
        """Log scroll command instead of executing it."""
        self.scroll_count += 1
        logger.info(f"[MockController] Scroll: dy={dy:+.4f} (call #{self.scroll_count})")

    async def move_cursor(self, x: float, y: float) -> None:
        """Log cursor move instead of executing it."""
        self.cursor_count += 1
        logger.debug(f"[MockController] Cursor: ({x:.3f}, {y:.3f}) (call #{self.cursor_count})")

    async def click(self) -> None:
        """Log click instead of executing it."""
        self.click_count += 1
        logger.info(f"[MockController] Click (call #{self.click_count})")

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.scroll_count = 0
        self.cursor_count = 0
        self.click_count = 0


class RecordingSink:
    """Gesture sink that records every callback in call order."""

    def __init__(self):
        self.modes: List[GestureMode] = []
        self.scrolls: List[float] = []
        self.cursors: List[Tuple[float, float]] = []
        self.clicks = 0
        self.histories: List[Tuple[TrackedPoint, ...]] = []
        self.events: List[Tuple[str, object]] = []

    def on_gesture_change(self, mode: GestureMode) -> None:
        self.modes.append(mode)
        self.events.append(("mode", mode))

    def on_scroll(self, delta_y: float) -> None:
        self.scrolls.append(delta_y)
        self.events.append(("scroll", delta_y))

    def on_cursor_move(self, x: float, y: float) -> None:
        self.cursors.append((x, y))
        self.events.append(("cursor", (x, y)))

    def on_click(self) -> None:
        self.clicks += 1
        self.events.append(("click", None))

    def on_history_update(self, points: Sequence[TrackedPoint]) -> None:
        self.histories.append(tuple(points))
        self.events.append(("history", len(points)))


async def dispatch(controller: ControllerProto, result) -> None:
    """
    Execute the commands of one FrameResult on a controller.

    Zero scroll deltas are not sent.
    """
    if result.scroll is not None and result.scroll.dy != 0:
        await controller.scroll(result.scroll.dy)
    if result.cursor is not None:
        await controller.move_cursor(result.cursor.x, result.cursor.y)
    if result.click is not None:
        await controller.click()
