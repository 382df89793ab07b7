"""
Gesture recognition classes that turn per-frame hand landmarks into
scroll, cursor and click commands.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Sequence, Tuple

from .config import Cfg, ClickConfig
from .geometry import centroid
from .landmarks import INDEX_TIP, MIDDLE_TIP, classify_pose
from .orientation import OrientationTracker, detect_orientation
from .smoothing import AdaptiveSmoother
from .trajectory import TrajectoryHistory, analyze_movement
from .types import (
    ClickCommand,
    CursorCommand,
    FrameResult,
    GestureMode,
    GestureSink,
    PoseClass,
    ScrollCommand,
    TrackedPoint,
)

logger = logging.getLogger(__name__)


MODE_MESSAGES = {
    GestureMode.IDLE: "Waiting for a gesture",
    GestureMode.HAND_DETECTED: "Hand detected",
    GestureMode.SCROLLING: "Scrolling",
    GestureMode.POINTING: "Pointing",
    GestureMode.CLICKING: "Click",
    GestureMode.TRANSITION: "Changing orientation",
    GestureMode.RESETTING: "Resetting",
}

POSE_CONFIDENCE = {
    PoseClass.NO_HAND: 0.0,
    PoseClass.INDETERMINATE: 0.5,
    PoseClass.SCROLL: 1.0,
    PoseClass.POINT: 1.0,
}


class ClickGesture:
    """
    Detects a forward push of the pointing fingertip.

    Features:
    - Ring buffer of recent fingertip depths
    - Depth change measured across the whole buffer, not frame to frame
    - Cooldown between clicks
    - Buffer cleared after a click so one push fires once
    """

    def __init__(self, cfg: Optional[ClickConfig] = None):
        """Initialize click detector."""
        self.cfg = cfg or ClickConfig()
        self.depth_samples: Deque[float] = deque(maxlen=self.cfg.depth_window)
        self.last_click_time: Optional[float] = None

    def update(self, z: float, t_now: float) -> Optional[ClickCommand]:
        """
        Add one depth sample and return a click if the push qualifies.

        Args:
            z: Relative depth of the fingertip (negative = toward camera)
            t_now: Current timestamp in seconds

        Returns:
            ClickCommand if a click was accepted on this frame, None otherwise
        """
        self.depth_samples.append(z)

        if len(self.depth_samples) < self.cfg.min_samples:
            return None

        delta_z = self.depth_samples[-1] - self.depth_samples[0]
        if delta_z >= self.cfg.z_threshold:
            return None

        if self.cooldown_active(t_now):
            return None

        self.last_click_time = t_now
        self.depth_samples.clear()
        logger.info(f"Click accepted (dz={delta_z:.3f})")
        return ClickCommand(timestamp=t_now)

    def cooldown_active(self, t_now: float) -> bool:
        if self.last_click_time is None:
            return False
        return (t_now - self.last_click_time) * 1000 < self.cfg.cooldown_ms

    def clear(self) -> None:
        """Drop buffered depth samples; the cooldown is kept."""
        self.depth_samples.clear()


@dataclass
class SessionState:
    """
    All mutable per-session state, owned by the controller.

    Resets replace fields with fresh instances, so nothing from one
    gesture type can reach the next.
    """
    cfg: Cfg
    pose: PoseClass = PoseClass.NO_HAND
    mode: GestureMode = GestureMode.IDLE
    last_timestamp: Optional[float] = None
    gesture_start: Optional[float] = None
    orientation: OrientationTracker = field(init=False)
    history: TrajectoryHistory = field(init=False)
    centroid_filter: AdaptiveSmoother = field(init=False)
    pointer_filter: AdaptiveSmoother = field(init=False)
    click: ClickGesture = field(init=False)

    def __post_init__(self):
        self.orientation = OrientationTracker(self.cfg.orientation)
        self.click = ClickGesture(self.cfg.click)
        self.reset_scroll()
        self.reset_pointer()

    def reset_scroll(self) -> None:
        """Forget the scroll session: start marker, history, centroid filter."""
        self.gesture_start = None
        self.history = TrajectoryHistory(self.cfg.scroll.history_capacity)
        self.centroid_filter = AdaptiveSmoother(self.cfg.smoothing.centroid)

    def reset_pointer(self) -> None:
        """Forget the pointer session: cursor filter and depth samples."""
        self.pointer_filter = AdaptiveSmoother(self.cfg.smoothing.pointer)
        self.click.clear()

    def begin_scroll(self, t_now: float) -> None:
        self.reset_scroll()
        self.gesture_start = t_now

    @property
    def scroll_active(self) -> bool:
        return self.gesture_start is not None

    @property
    def pointer_active(self) -> bool:
        return self.pointer_filter.value is not None or len(self.click.depth_samples) > 0

    def snapshot(self) -> Tuple[TrackedPoint, ...]:
        """Read-only copy of the trajectory history."""
        return self.history.snapshot()


class ScrollGesture:
    """
    Converts two-finger motion into scroll commands.

    Features:
    - Warm-up period while the pose forms
    - Orientation flips suppress output for a transition window
    - Adaptive smoothing of the fingertip centroid
    - Linearity and direction analysis over recent history
    """

    def __init__(self, cfg: Cfg):
        """Initialize scroll gesture processor."""
        self.cfg = cfg

    def update(self, landmarks: Sequence[Sequence[float]], state: SessionState, t_now: float) -> FrameResult:
        """
        Process one scroll-pose frame.

        Args:
            landmarks: Hand landmarks classified as scroll pose
            state: Session state to read and update
            t_now: Current timestamp in seconds

        Returns:
            FrameResult with mode and, once analysis ran, a scroll command
        """
        if not state.scroll_active:
            state.begin_scroll(t_now)

        index_tip = landmarks[INDEX_TIP]
        middle_tip = landmarks[MIDDLE_TIP]
        orientation = detect_orientation(index_tip, middle_tip, self.cfg.orientation.dominance_margin)
        state.orientation.update(orientation, t_now)

        in_transition = state.orientation.in_transition(t_now)
        warming_up = (t_now - state.gesture_start) * 1000 < self.cfg.scroll.warmup_ms

        if warming_up or in_transition:
            return FrameResult(
                mode=GestureMode.TRANSITION if in_transition else GestureMode.IDLE,
                pose=PoseClass.SCROLL,
                orientation=orientation,
                warming_up=warming_up,
                in_transition=in_transition,
            )

        raw_x, raw_y = centroid(index_tip, middle_tip)
        x, y = state.centroid_filter.update(raw_x, raw_y)
        state.history.append(TrackedPoint(x=x, y=y, timestamp=t_now, orientation=orientation))

        analysis = analyze_movement(state.history, self.cfg.scroll)
        return FrameResult(
            mode=analysis.mode,
            pose=PoseClass.SCROLL,
            scroll=ScrollCommand(dy=analysis.delta_y),
            orientation=orientation,
        )


class PointerGesture:
    """
    Converts a pointing index finger into cursor moves and clicks.
    """

    def __init__(self, cfg: Cfg):
        """Initialize pointer gesture processor."""
        self.cfg = cfg

    def update(self, landmarks: Sequence[Sequence[float]], state: SessionState, t_now: float) -> FrameResult:
        """
        Process one point-pose frame.

        Args:
            landmarks: Hand landmarks classified as point pose
            state: Session state to read and update
            t_now: Current timestamp in seconds

        Returns:
            FrameResult with a cursor command and possibly a click
        """
        tip = landmarks[INDEX_TIP]
        x, y = state.pointer_filter.update(tip[0], tip[1])

        # Camera image is mirrored relative to the user
        cursor = CursorCommand(x=_clamp01(1.0 - x), y=_clamp01(y))

        z = tip[2] if len(tip) > 2 else 0.0
        click = state.click.update(z, t_now)

        return FrameResult(
            mode=GestureMode.CLICKING if click else GestureMode.POINTING,
            pose=PoseClass.POINT,
            cursor=cursor,
            click=click,
        )


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class GestureSessionController:
    """
    Main gesture processor that routes every frame through the scroll or
    pointer path and owns all session resets.
    """

    def __init__(self, cfg: Optional[Cfg] = None, sink: Optional[GestureSink] = None):
        """Initialize controller with configuration and an optional callback sink."""
        self.cfg = cfg or Cfg()
        self.sink = sink
        self.state = SessionState(self.cfg)
        self.scroll_gesture = ScrollGesture(self.cfg)
        self.pointer_gesture = PointerGesture(self.cfg)

    def process_frame(self, landmarks: Optional[Sequence[Sequence[float]]], t_now: float) -> FrameResult:
        """
        Process a frame and return the mode and commands it produced.

        Args:
            landmarks: 21 hand landmarks (x, y, z), or None if no hand detected
            t_now: Monotonic timestamp in seconds

        Returns:
            FrameResult for this frame
        """
        state = self.state
        if state.last_timestamp is not None and t_now < state.last_timestamp:
            logger.warning(f"Timestamp went backwards: {t_now:.3f} < {state.last_timestamp:.3f}")
        state.last_timestamp = t_now

        pose = classify_pose(landmarks, self.cfg.pose)
        if pose != state.pose:
            logger.debug(f"Pose {state.pose.value} -> {pose.value}")

        if pose == PoseClass.SCROLL:
            self._end_pointer()
            result = self.scroll_gesture.update(landmarks, state, t_now)
        elif pose == PoseClass.POINT:
            self._end_scroll()
            result = self.pointer_gesture.update(landmarks, state, t_now)
        else:
            self._end_scroll()
            self._end_pointer()
            mode = GestureMode.IDLE if pose == PoseClass.NO_HAND else GestureMode.HAND_DETECTED
            result = FrameResult(mode=mode, pose=pose)

        result.confidence = POSE_CONFIDENCE[pose]
        result.message = MODE_MESSAGES[result.mode]

        if result.mode != state.mode:
            logger.debug(f"Mode {state.mode.value} -> {result.mode.value}")
        state.pose = pose
        state.mode = result.mode

        self._emit(result)
        return result

    def _end_scroll(self) -> None:
        """Reset the scroll session if one is in progress."""
        if self.state.scroll_active:
            logger.debug("Reset scroll session")
            self.state.reset_scroll()

    def _end_pointer(self) -> None:
        """Reset the pointer session if one is in progress."""
        if self.state.pointer_active:
            logger.debug("Reset pointer session")
            self.state.reset_pointer()

    def _emit(self, result: FrameResult) -> None:
        """Invoke sink callbacks for this frame's effects."""
        if self.sink is None:
            return

        if result.scroll is not None:
            self.sink.on_history_update(self.state.snapshot())
            self.sink.on_scroll(result.scroll.dy)
        if result.cursor is not None:
            self.sink.on_cursor_move(result.cursor.x, result.cursor.y)
        if result.click is not None:
            self.sink.on_click()
        self.sink.on_gesture_change(result.mode)

    def reset(self) -> None:
        """Reinitialize the whole session, including orientation and click cooldown."""
        self.state = SessionState(self.cfg)
