"""Speech segment detection with Silero VAD."""

from .speech import Detector, DetectorConfig, Segment

__version__ = "0.1.0"

__all__ = [
    "Detector",
    "DetectorConfig",
    "Segment",
]
