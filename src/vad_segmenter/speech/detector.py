"""Speech segment detection over Silero VAD probabilities."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence, Union

import numpy as np

from .errors import InsufficientSamplesError, InvalidConfigError, UnexpectedSpeechEndError
from .model import RecurrentState, SileroOnnxModel, SpeechModel
from .types import DetectorConfig, Segment

logger = logging.getLogger(__name__)


class Detector:
    """
    Hysteresis-based speech segmenter.

    Splits a PCM buffer into fixed windows, asks the model for a speech
    probability per window and turns the probability trace into speech
    segments. Running state carries over between detect() calls until
    reset() is called, so one instance should not be shared by unrelated
    streams without a reset in between. Not safe for concurrent use.
    """

    def __init__(
        self,
        cfg: DetectorConfig,
        model: Optional[SpeechModel] = None,
    ):
        """
        Initialize Detector.

        Args:
            cfg: Detector configuration; zero-valued defaults are substituted
            model: Speech probability model (default: SileroOnnxModel built from cfg)

        Raises:
            InvalidConfigError: if cfg is invalid
        """
        try:
            cfg.validate()
        except InvalidConfigError as e:
            raise InvalidConfigError(f"invalid config: {e}") from e

        self._cfg = cfg.resolved()
        if model is None:
            model = SileroOnnxModel(model_path=self._cfg.model_path, log_level=self._cfg.log_level)
        self._model = model

        self._curr_sample = 0
        self._triggered = False
        self._temp_end: Optional[int] = None
        self._state = RecurrentState.zeros(self._cfg.sample_rate)

    @property
    def config(self) -> DetectorConfig:
        """Configuration in effect, with defaults substituted."""
        return self._cfg

    @property
    def triggered(self) -> bool:
        return self._triggered

    def detect(self, pcm: Union[Sequence[float], np.ndarray]) -> list[Segment]:
        """
        Detect speech segments in a buffer of normalized float samples.

        Only complete windows are processed; trailing samples shorter than
        one window are dropped. The last segment may be open (speech_end_at
        is None) if the buffer ends mid-speech.

        Args:
            pcm: Mono float audio at cfg.sample_rate

        Returns:
            Segments in start order; timestamps count from the first sample
            seen since the last reset(), i.e. from pcm[0] after a reset

        Raises:
            ValueError: if pcm is not one-dimensional
            InsufficientSamplesError: if pcm is shorter than one window
            UnexpectedSpeechEndError: if silence closes speech not opened in this call
        """
        cfg = self._cfg
        samples = np.asarray(pcm, dtype=np.float32)
        window_size = cfg.window_size

        if samples.ndim != 1:
            raise ValueError(f"expected mono samples, got array of shape {samples.shape}")
        if samples.shape[0] < window_size:
            raise InsufficientSamplesError()

        logger.debug("starting speech detection, samples_len=%d", samples.shape[0])

        min_silence_samples = cfg.ms_to_samples(cfg.min_silence_duration_ms)
        speech_pad_samples = cfg.ms_to_samples(cfg.speech_pad_ms)
        min_speech_samples = cfg.ms_to_samples(cfg.min_speech_duration_ms)

        segments: list[Segment] = []
        for i in range(0, samples.shape[0] - window_size + 1, window_size):
            speech_prob, self._state = self._model(
                samples[i:i + window_size], cfg.sample_rate, self._state
            )

            self._curr_sample += window_size

            if speech_prob >= cfg.threshold and self._temp_end is not None:
                self._temp_end = None

            if speech_prob >= cfg.threshold and not self._triggered:
                self._triggered = True
                # Padding can push the start before the buffer.
                start_at = max(
                    0.0,
                    (self._curr_sample - window_size - speech_pad_samples) / cfg.sample_rate,
                )
                logger.debug("speech start, start_at=%.3f", start_at)
                segments.append(Segment(speech_start_at=start_at))

            if speech_prob < cfg.negative_threshold and self._triggered:
                if self._temp_end is None:
                    self._temp_end = self._curr_sample

                if self._curr_sample - self._temp_end < min_silence_samples:
                    continue

                end_at = (self._temp_end + speech_pad_samples) / cfg.sample_rate
                self._temp_end = None
                self._triggered = False
                logger.debug("speech end, end_at=%.3f", end_at)

                if not segments:
                    raise UnexpectedSpeechEndError()

                segments[-1].speech_end_at = end_at

        logger.debug("speech detection done, segments_len=%d", len(segments))

        if cfg.min_speech_duration_ms > 0:
            segments = [s for s in segments if self._long_enough(s, min_speech_samples)]

        return segments

    def _long_enough(self, segment: Segment, min_speech_samples: int) -> bool:
        # Open segments have an unknown duration and are always kept.
        if segment.is_open:
            return True

        # Boundaries are whole sample counts divided by the rate; round away float error.
        duration_samples = round(segment.duration * self._cfg.sample_rate)
        if duration_samples >= min_speech_samples:
            return True

        logger.debug(
            "filtered out short speech segment, start_at=%.3f, end_at=%.3f, duration=%.3f, min_duration_ms=%d",
            segment.speech_start_at,
            segment.speech_end_at,
            segment.duration,
            self._cfg.min_speech_duration_ms,
        )
        return False

    def reset(self) -> None:
        """Clear running state (sample counter, hysteresis, model state); keep configuration."""
        self._curr_sample = 0
        self._triggered = False
        self._temp_end = None
        self._state = RecurrentState.zeros(self._cfg.sample_rate)

    def set_threshold(self, value: float) -> None:
        self._cfg = replace(self._cfg, threshold=value)

    def set_negative_threshold(self, value: float) -> None:
        self._cfg = replace(self._cfg, negative_threshold=value)

    def set_min_speech_duration_ms(self, value: int) -> None:
        self._cfg = replace(self._cfg, min_speech_duration_ms=value)

    def close(self) -> None:
        """Release model resources, if the model holds any."""
        close = getattr(self._model, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "Detector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
