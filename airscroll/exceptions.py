"""
Custom exceptions for the gesture scroll pipeline.
"""


class AirscrollError(Exception):
    """Base exception for airscroll errors."""
    pass


class ConfigError(AirscrollError):
    """Raised when configuration is missing keys or holds invalid values."""
    pass


class LandmarkSourceError(AirscrollError):
    """Raised when the camera or hand landmark model cannot be used."""
    pass
