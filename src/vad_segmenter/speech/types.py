"""Speech detector data types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .errors import InvalidConfigError

SUPPORTED_SAMPLE_RATES = (8000, 16000)

# Substituted when the caller leaves the field at zero.
NEGATIVE_THRESHOLD_OFFSET = 0.15
DEFAULT_MIN_SPEECH_DURATION_MS = 250


def window_size_for(sample_rate: int) -> int:
    """Number of samples per inference window (256 @ 8 kHz, 512 @ 16 kHz)."""
    return 256 if sample_rate == 8000 else 512


class OrtLogLevel(Enum):
    """onnxruntime session log severity."""
    VERBOSE = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    @classmethod
    def from_name(cls, name: str) -> "OrtLogLevel":
        """Parse a case-insensitive level name ("warn", "warning", "error", ...)."""
        key = name.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown onnxruntime log level: {name!r}") from None


@dataclass(frozen=True)
class DetectorConfig:
    """Speech detector configuration."""
    sample_rate: int = 16000
    threshold: float = 0.5
    negative_threshold: float = 0.0  # 0 = threshold - NEGATIVE_THRESHOLD_OFFSET
    min_silence_duration_ms: int = 0
    min_speech_duration_ms: int = 0  # 0 = DEFAULT_MIN_SPEECH_DURATION_MS
    speech_pad_ms: int = 0
    model_path: Optional[str] = None  # None = Silero weights shipped with silero-vad
    log_level: OrtLogLevel = OrtLogLevel.WARN

    def validate(self) -> None:
        """
        Check every constraint in a fixed order.

        Raises:
            InvalidConfigError: on the first violated constraint.
        """
        if self.model_path is not None and not self.model_path:
            raise InvalidConfigError("invalid model_path: should not be empty")

        if self.sample_rate not in SUPPORTED_SAMPLE_RATES:
            raise InvalidConfigError("invalid sample_rate: valid values are 8000 and 16000")

        if self.threshold <= 0 or self.threshold >= 1:
            raise InvalidConfigError("invalid threshold: should be in range (0, 1)")

        if self.negative_threshold < 0 or self.negative_threshold >= 1:
            raise InvalidConfigError("invalid negative_threshold: should be in range [0, 1)")

        if self.negative_threshold > 0 and self.negative_threshold >= self.threshold:
            raise InvalidConfigError("invalid negative_threshold: should be less than threshold")

        if self.min_silence_duration_ms < 0:
            raise InvalidConfigError("invalid min_silence_duration_ms: should not be negative")

        if self.min_speech_duration_ms < 0:
            raise InvalidConfigError("invalid min_speech_duration_ms: should not be negative")

        if self.speech_pad_ms < 0:
            raise InvalidConfigError("invalid speech_pad_ms: should not be negative")

    def resolved(self) -> "DetectorConfig":
        """Return a copy with zero-valued defaults substituted."""
        cfg = self
        if cfg.negative_threshold == 0:
            cfg = replace(cfg, negative_threshold=max(0.0, cfg.threshold - NEGATIVE_THRESHOLD_OFFSET))
        if cfg.min_speech_duration_ms == 0:
            cfg = replace(cfg, min_speech_duration_ms=DEFAULT_MIN_SPEECH_DURATION_MS)
        return cfg

    @property
    def window_size(self) -> int:
        return window_size_for(self.sample_rate)

    def ms_to_samples(self, ms: int) -> int:
        return ms * self.sample_rate // 1000


@dataclass
class Segment:
    """Speech segment, in seconds from the first sample seen since the last reset."""
    speech_start_at: float
    speech_end_at: Optional[float] = None  # None while the segment is still open

    @property
    def is_open(self) -> bool:
        return self.speech_end_at is None

    @property
    def duration(self) -> Optional[float]:
        if self.speech_end_at is None:
            return None
        return self.speech_end_at - self.speech_start_at
