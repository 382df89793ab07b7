"""
Configuration management for the gesture scroll pipeline.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field, fields

from .exceptions import ConfigError


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 1
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.6


@dataclass
class PoseConfig:
    """Finger extension ratios used by the pose classifier."""
    scroll_extension_ratio: float = 1.1
    point_extension_ratio: float = 1.2
    curl_ratio: float = 1.1


@dataclass
class OrientationConfig:
    """Orientation detection and flip debouncing."""
    dominance_margin: float = 1.2
    transition_ms: int = 500


@dataclass
class SmoothingConfig:
    """Adaptive exponential smoothing parameters."""
    alpha_min: float
    alpha_max: float
    speed_low: float
    speed_high: float


def _centroid_smoothing() -> SmoothingConfig:
    return SmoothingConfig(alpha_min=0.08, alpha_max=0.6, speed_low=0.002, speed_high=0.03)


def _pointer_smoothing() -> SmoothingConfig:
    return SmoothingConfig(alpha_min=0.1, alpha_max=0.8, speed_low=0.005, speed_high=0.05)


@dataclass
class SmoothingSection:
    """Smoothing filters, one per tracked quantity."""
    centroid: SmoothingConfig = field(default_factory=_centroid_smoothing)
    pointer: SmoothingConfig = field(default_factory=_pointer_smoothing)


@dataclass
class ScrollConfig:
    """Scroll gesture configuration."""
    warmup_ms: int = 400
    history_capacity: int = 50
    analysis_window: int = 12
    min_samples: int = 5
    orientation_dominance: float = 0.7
    linearity_threshold: float = 0.6
    vertical_ratio: float = 0.4
    dead_zone: float = 0.0005


@dataclass
class ClickConfig:
    """Depth push click configuration."""
    depth_window: int = 5
    min_samples: int = 3
    z_threshold: float = -0.06
    cooldown_ms: int = 1000


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = True
    show_trail: bool = True
    mirror: bool = True
    window_name: str = "airscroll"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    pose: PoseConfig = field(default_factory=PoseConfig)
    orientation: OrientationConfig = field(default_factory=OrientationConfig)
    smoothing: SmoothingSection = field(default_factory=SmoothingSection)
    scroll: ScrollConfig = field(default_factory=ScrollConfig)
    click: ClickConfig = field(default_factory=ClickConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def default_config_path() -> Path:
    """Location of config.default.yaml, shipped inside the package."""
    return Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Values in the file override the built-in defaults; sections or keys
    that are left out keep their defaults.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: If the config file does not exist
        ConfigError: If the file holds unknown keys or invalid values
    """
    if path is None:
        path = default_config_path()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    return _dict_to_config(data or {})


def _build_section(cls, data: Any, name: str):
    """Build one section dataclass, rejecting keys it does not declare."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown keys in section '{name}': {', '.join(sorted(unknown))}")

    try:
        return cls(**data)
    except TypeError as e:
        raise ConfigError(f"Section '{name}' is incomplete: {e}") from e


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    sections = {f.name for f in fields(Cfg)}
    unknown = set(data) - sections
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    smoothing_data = data.get('smoothing') or {}
    if not isinstance(smoothing_data, dict):
        raise ConfigError("Section 'smoothing' must be a mapping")
    unknown = set(smoothing_data) - {'centroid', 'pointer'}
    if unknown:
        raise ConfigError(f"Unknown smoothing filters: {', '.join(sorted(unknown))}")

    defaults = SmoothingSection()
    centroid = _overlay(defaults.centroid, smoothing_data.get('centroid'), 'smoothing.centroid')
    pointer = _overlay(defaults.pointer, smoothing_data.get('pointer'), 'smoothing.pointer')

    cfg = Cfg(
        camera=_build_section(CameraConfig, data.get('camera'), 'camera'),
        mediapipe=_build_section(MediaPipeConfig, data.get('mediapipe'), 'mediapipe'),
        pose=_build_section(PoseConfig, data.get('pose'), 'pose'),
        orientation=_build_section(OrientationConfig, data.get('orientation'), 'orientation'),
        smoothing=SmoothingSection(centroid=centroid, pointer=pointer),
        scroll=_build_section(ScrollConfig, data.get('scroll'), 'scroll'),
        click=_build_section(ClickConfig, data.get('click'), 'click'),
        display=_build_section(DisplayConfig, data.get('display'), 'display'),
    )
    validate_config(cfg)
    return cfg


def _overlay(base: SmoothingConfig, data: Any, name: str) -> SmoothingConfig:
    """Override the fields of a default smoothing config with file values."""
    merged = {f.name: getattr(base, f.name) for f in fields(SmoothingConfig)}
    if data is not None:
        if not isinstance(data, dict):
            raise ConfigError(f"Section '{name}' must be a mapping")
        merged.update(data)
    return _build_section(SmoothingConfig, merged, name)


def validate_config(cfg: Cfg) -> None:
    """
    Check cross-field constraints that dataclass typing cannot express.

    Raises:
        ConfigError: On the first violated constraint
    """
    for name, smoothing in (("centroid", cfg.smoothing.centroid), ("pointer", cfg.smoothing.pointer)):
        if not 0.0 < smoothing.alpha_min <= smoothing.alpha_max <= 1.0:
            raise ConfigError(f"smoothing.{name}: need 0 < alpha_min <= alpha_max <= 1")
        if not 0.0 <= smoothing.speed_low < smoothing.speed_high:
            raise ConfigError(f"smoothing.{name}: need 0 <= speed_low < speed_high")

    scroll = cfg.scroll
    if scroll.history_capacity < 2:
        raise ConfigError("scroll.history_capacity must be at least 2")
    if not 2 <= scroll.min_samples <= scroll.analysis_window <= scroll.history_capacity:
        raise ConfigError("scroll: need 2 <= min_samples <= analysis_window <= history_capacity")
    if not 0.0 < scroll.orientation_dominance < 1.0:
        raise ConfigError("scroll.orientation_dominance must be between 0 and 1")
    if scroll.warmup_ms < 0 or cfg.orientation.transition_ms < 0:
        raise ConfigError("warm-up and transition windows cannot be negative")

    if cfg.orientation.dominance_margin < 1.0:
        raise ConfigError("orientation.dominance_margin must be >= 1.0")

    click = cfg.click
    if not 2 <= click.min_samples <= click.depth_window:
        raise ConfigError("click: need 2 <= min_samples <= depth_window")
    if click.z_threshold >= 0:
        raise ConfigError("click.z_threshold must be negative (toward the camera)")
    if click.cooldown_ms < 0:
        raise ConfigError("click.cooldown_ms cannot be negative")
