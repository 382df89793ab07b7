"""
Hand Gesture Scroll and Pointer Control

Turns per-frame hand landmarks into a stable scroll velocity, a smoothed
cursor position and depth-push click events.
"""

__version__ = "0.1.0"

from .types import (
    GestureMode,
    Orientation,
    PoseClass,
    TrackedPoint,
    ScrollCommand,
    CursorCommand,
    ClickCommand,
    FrameResult,
    GestureSink,
    ControllerProto,
)
from .config import load_config, Cfg
from .exceptions import AirscrollError, ConfigError, LandmarkSourceError
from .controller_mock import MockController, RecordingSink
from .landmarks import classify_pose, is_scroll_pose, is_point_pose
from .orientation import detect_orientation, OrientationTracker
from .smoothing import AdaptiveSmoother
from .trajectory import TrajectoryHistory, analyze_movement
from .gestures import ClickGesture, GestureSessionController, SessionState

__all__ = [
    "GestureMode",
    "Orientation",
    "PoseClass",
    "TrackedPoint",
    "ScrollCommand",
    "CursorCommand",
    "ClickCommand",
    "FrameResult",
    "GestureSink",
    "ControllerProto",
    "load_config",
    "Cfg",
    "AirscrollError",
    "ConfigError",
    "LandmarkSourceError",
    "MockController",
    "RecordingSink",
    "classify_pose",
    "is_scroll_pose",
    "is_point_pose",
    "detect_orientation",
    "OrientationTracker",
    "AdaptiveSmoother",
    "TrajectoryHistory",
    "analyze_movement",
    "ClickGesture",
    "GestureSessionController",
    "SessionState",
]
