"""Speech segment detection - Silero VAD probabilities to speech segments."""

from __future__ import annotations

from .types import (
    DEFAULT_MIN_SPEECH_DURATION_MS,
    NEGATIVE_THRESHOLD_OFFSET,
    DetectorConfig,
    OrtLogLevel,
    Segment,
    window_size_for,
)
from .errors import (
    DetectorError,
    InsufficientSamplesError,
    InvalidConfigError,
    ModelClosedError,
    UnexpectedSpeechEndError,
)
from .model import RecurrentState, SileroOnnxModel, SpeechModel, default_model_path
from .detector import Detector

__all__ = [
    "DEFAULT_MIN_SPEECH_DURATION_MS",
    "NEGATIVE_THRESHOLD_OFFSET",
    "Detector",
    "DetectorConfig",
    "DetectorError",
    "InsufficientSamplesError",
    "InvalidConfigError",
    "ModelClosedError",
    "OrtLogLevel",
    "RecurrentState",
    "Segment",
    "SileroOnnxModel",
    "SpeechModel",
    "UnexpectedSpeechEndError",
    "default_model_path",
    "window_size_for",
]
