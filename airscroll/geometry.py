"""
Distance and centroid helpers over 2-D points.
"""
import math
from typing import Sequence, Tuple

import numpy as np


Point2D = Tuple[float, float]


def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Euclidean distance between two points, using only x and y."""
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def landmark_distance(landmarks: Sequence[Sequence[float]], i: int, j: int) -> float:
    """Planar distance between landmark i and landmark j."""
    return distance(landmarks[i], landmarks[j])


def centroid(p1: Sequence[float], p2: Sequence[float]) -> Point2D:
    """Midpoint of two points."""
    return ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)


def chord_deviation(points: Sequence[Sequence[float]]) -> float:
    """
    Maximum perpendicular distance of the points from the chord through
    the first and last point.

    The chord is the line a*x + b*y + c = 0 with a = y0 - y1, b = x1 - x0
    and c = x0*y1 - x1*y0. A zero-length chord (first and last point
    coincide) counts as perfectly linear and returns 0.

    Args:
        points: Sequence of at least two (x, y) points

    Returns:
        Deviation score in the same units as the input coordinates
    """
    if len(points) < 2:
        return 0.0

    x0, y0 = points[0][0], points[0][1]
    x1, y1 = points[-1][0], points[-1][1]
    a = y0 - y1
    b = x1 - x0
    c = x0 * y1 - x1 * y0
    den = math.hypot(a, b)
    if den == 0:
        return 0.0

    xy = np.array([(p[0], p[1]) for p in points], dtype=float)
    dists = np.abs(a * xy[:, 0] + b * xy[:, 1] + c) / den
    return float(dists.max())
