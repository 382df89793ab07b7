"""
Speed-adaptive exponential smoothing for tracked points.
"""
from typing import Optional, Tuple

from .config import SmoothingConfig
from .geometry import distance


def adaptive_alpha(dist: float, cfg: SmoothingConfig) -> float:
    """
    Blend factor for a step of the given length.

    Slow steps get alpha_min, fast steps alpha_max, and steps in between
    ramp linearly from one to the other.
    """
    if dist <= cfg.speed_low:
        return cfg.alpha_min
    if dist >= cfg.speed_high:
        return cfg.alpha_max
    t = (dist - cfg.speed_low) / (cfg.speed_high - cfg.speed_low)
    return cfg.alpha_min + t * (cfg.alpha_max - cfg.alpha_min)


class AdaptiveSmoother:
    """
    Exponential smoother whose blend factor follows the point's speed.

    Jitter at rest is damped heavily while deliberate fast motion is
    followed almost immediately.
    """

    def __init__(self, cfg: SmoothingConfig):
        self.cfg = cfg
        self._state: Optional[Tuple[float, float]] = None

    def update(self, x: float, y: float) -> Tuple[float, float]:
        """
        Smooth one raw sample.

        Args:
            x: Raw x coordinate
            y: Raw y coordinate

        Returns:
            The smoothed (x, y); the raw sample itself on a cold start
        """
        if self._state is None:
            self._state = (x, y)
            return self._state

        prev_x, prev_y = self._state
        alpha = adaptive_alpha(distance((x, y), self._state), self.cfg)
        self._state = (prev_x + (x - prev_x) * alpha, prev_y + (y - prev_y) * alpha)
        return self._state

    @property
    def value(self) -> Optional[Tuple[float, float]]:
        return self._state

    def reset(self) -> None:
        self._state = None
