"""
Hand landmark detection using MediaPipe, plus the debug overlay.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, List, Sequence, Tuple

from .exceptions import LandmarkSourceError
from .landmarks import INDEX_TIP, MIDDLE_TIP
from .types import FrameResult, GestureMode, TrackedPoint


# BGR colours for the overlay
WARMUP_COLOR = (21, 204, 250)
TRANSITION_COLOR = (182, 114, 244)
TRAIL_ACTIVE_COLOR = (128, 222, 74)
TRAIL_IDLE_COLOR = (184, 163, 148)
CURSOR_COLOR = (250, 165, 96)
CLICK_COLOR = (68, 68, 239)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.6, min_tracking_conf: float = 0.6):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking

        Raises:
            LandmarkSourceError: If the installed MediaPipe has no Hands solution
        """
        try:
            self.mp_hands = mp.solutions.hands
        except AttributeError as e:
            raise LandmarkSourceError("Installed mediapipe does not provide mp.solutions.hands") from e

        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Tuple[float, float, float]]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 (x, y, z) landmarks, x and y in [0..1], or None if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # Only the first hand drives gestures
            hand_landmarks = results.multi_hand_landmarks[0]
            return [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]

        return None

    def close(self) -> None:
        self.hands.close()

    def draw_landmarks(self, frame: np.ndarray, landmarks: Sequence[Sequence[float]]) -> np.ndarray:
        """
        Draw hand landmarks on the frame.

        Args:
            frame: Input frame
            landmarks: List of (x, y, ...) coordinates in [0..1] range

        Returns:
            Frame with landmarks drawn
        """
        height, width = frame.shape[:2]
        for point in landmarks:
            cv2.circle(frame, (int(point[0] * width), int(point[1] * height)), 3, (0, 255, 0), -1)
        return frame

    def draw_gesture(self, frame: np.ndarray, landmarks: Sequence[Sequence[float]],
                     result: FrameResult, history: Sequence[TrackedPoint]) -> np.ndarray:
        """
        Draw the gesture state for one frame: fingertip dots, warm-up or
        transition ring, scroll trail and pointing cursor.
        """
        height, width = frame.shape[:2]

        def px(x: float, y: float) -> Tuple[int, int]:
            return (int(x * width), int(y * height))

        if result.cursor is not None:
            tip = landmarks[INDEX_TIP]
            color = CLICK_COLOR if result.click is not None else CURSOR_COLOR
            cv2.circle(frame, px(tip[0], tip[1]), 15, color, -1)
            cv2.circle(frame, px(tip[0], tip[1]), 15, (255, 255, 255), 2)
            return frame

        if result.orientation is None:
            return frame

        index_tip, middle_tip = landmarks[INDEX_TIP], landmarks[MIDDLE_TIP]
        if result.warming_up or result.in_transition:
            cx = (index_tip[0] + middle_tip[0]) / 2
            cy = (index_tip[1] + middle_tip[1]) / 2
            color = TRANSITION_COLOR if result.in_transition else WARMUP_COLOR
            cv2.circle(frame, px(cx, cy), 25, color, 3)
            return frame

        for tip in (index_tip, middle_tip):
            cv2.circle(frame, px(tip[0], tip[1]), 8, CURSOR_COLOR, -1)

        if len(history) > 1:
            pts = np.array([px(p.x, p.y) for p in history], dtype=np.int32)
            color = TRAIL_ACTIVE_COLOR if result.mode == GestureMode.SCROLLING else TRAIL_IDLE_COLOR
            cv2.polylines(frame, [pts], False, color, 4)
        return frame
