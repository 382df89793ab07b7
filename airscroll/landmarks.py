"""
Hand landmark indices and pose classification.

Poses are judged from relative distances only: a finger counts as
extended when its tip is farther from the wrist than its own knuckle by
some ratio, so no global hand-size constant is needed.
"""
import logging
from typing import Optional, Sequence

from .config import PoseConfig
from .geometry import landmark_distance
from .types import PoseClass

logger = logging.getLogger(__name__)

NUM_LANDMARKS = 21

WRIST = 0
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_TIP = 12
RING_MCP = 13
RING_TIP = 16


def is_valid_hand(landmarks: Optional[Sequence[Sequence[float]]]) -> bool:
    """
    Check that a landmark set is usable.

    Args:
        landmarks: List of hand landmarks, or None

    Returns:
        True if there are 21 points with at least x and y each
    """
    if landmarks is None or len(landmarks) < NUM_LANDMARKS:
        return False
    return all(len(point) >= 2 for point in landmarks[:NUM_LANDMARKS])


def extension_ratio(landmarks: Sequence[Sequence[float]], tip: int, knuckle: int) -> float:
    """
    Ratio of the tip-to-wrist distance over the knuckle-to-wrist distance.

    Returns 0.0 when the knuckle sits on the wrist, so a collapsed hand
    never reads as extended.
    """
    reference = landmark_distance(landmarks, WRIST, knuckle)
    if reference == 0:
        return 0.0
    return landmark_distance(landmarks, WRIST, tip) / reference


def is_curled(landmarks: Sequence[Sequence[float]], tip: int, knuckle: int, ratio: float) -> bool:
    """
    Check that a fingertip sits within ratio times its knuckle's distance from the wrist.

    Compares distances directly so a knuckle collapsed onto the wrist
    never reads as curled.
    """
    return landmark_distance(landmarks, WRIST, tip) < landmark_distance(landmarks, WRIST, knuckle) * ratio


def is_scroll_pose(landmarks: Sequence[Sequence[float]], cfg: Optional[PoseConfig] = None) -> bool:
    """
    Check if index and middle fingers are both extended.

    Args:
        landmarks: List of 21 hand landmarks
        cfg: Pose thresholds, defaults if None

    Returns:
        True if both fingers pass the scroll extension ratio
    """
    cfg = cfg or PoseConfig()
    index_extended = extension_ratio(landmarks, INDEX_TIP, INDEX_MCP) > cfg.scroll_extension_ratio
    middle_extended = extension_ratio(landmarks, MIDDLE_TIP, MIDDLE_MCP) > cfg.scroll_extension_ratio
    return index_extended and middle_extended


def is_point_pose(landmarks: Sequence[Sequence[float]], cfg: Optional[PoseConfig] = None) -> bool:
    """
    Check if only the index finger is extended, with middle and ring curled.

    Args:
        landmarks: List of 21 hand landmarks
        cfg: Pose thresholds, defaults if None

    Returns:
        True if the hand is pointing
    """
    cfg = cfg or PoseConfig()
    index_extended = extension_ratio(landmarks, INDEX_TIP, INDEX_MCP) > cfg.point_extension_ratio
    middle_curled = is_curled(landmarks, MIDDLE_TIP, MIDDLE_MCP, cfg.curl_ratio)
    ring_curled = is_curled(landmarks, RING_TIP, RING_MCP, cfg.curl_ratio)
    return index_extended and middle_curled and ring_curled


def classify_pose(landmarks: Optional[Sequence[Sequence[float]]],
                  cfg: Optional[PoseConfig] = None) -> PoseClass:
    """
    Classify one frame's landmark set.

    Scroll is checked before point; the two cannot both hold because
    point requires the middle finger curled.

    Args:
        landmarks: List of 21 hand landmarks, or None if no hand was seen
        cfg: Pose thresholds, defaults if None

    Returns:
        The pose class for this frame
    """
    if landmarks is None:
        return PoseClass.NO_HAND
    if not is_valid_hand(landmarks):
        logger.debug(f"Ignoring malformed landmark set with {len(landmarks)} points")
        return PoseClass.NO_HAND

    if is_scroll_pose(landmarks, cfg):
        return PoseClass.SCROLL
    if is_point_pose(landmarks, cfg):
        return PoseClass.POINT
    return PoseClass.INDETERMINATE
