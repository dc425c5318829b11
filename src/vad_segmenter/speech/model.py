"""Silero VAD inference on top of onnxruntime."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from typing import Optional, Protocol

import numpy as np
import onnxruntime as ort

from .errors import ModelClosedError
from .types import OrtLogLevel, SUPPORTED_SAMPLE_RATES, window_size_for

logger = logging.getLogger(__name__)

STATE_SHAPE = (2, 1, 128)
_SILERO_MODEL_PACKAGE = "silero_vad.data"
_SILERO_MODEL_FILE = "silero_vad.onnx"


def context_size_for(sample_rate: int) -> int:
    """Trailing samples of the previous window prepended to each input."""
    return 32 if sample_rate == 8000 else 64


@dataclass
class RecurrentState:
    """Opaque state threaded through successive model calls."""
    state: np.ndarray    # shape: STATE_SHAPE float32
    context: np.ndarray  # shape: (context_size,) float32

    @classmethod
    def zeros(cls, sample_rate: int) -> "RecurrentState":
        return cls(
            state=np.zeros(STATE_SHAPE, dtype=np.float32),
            context=np.zeros(context_size_for(sample_rate), dtype=np.float32),
        )


class SpeechModel(Protocol):
    """Maps one fixed-size window plus recurrent state to a speech probability."""

    def __call__(
        self,
        window: np.ndarray,
        sample_rate: int,
        state: RecurrentState,
    ) -> tuple[float, RecurrentState]:
        ...


def default_model_path() -> str:
    """Path of the Silero VAD ONNX weights bundled with the silero-vad package."""
    return str(resources.files(_SILERO_MODEL_PACKAGE).joinpath(_SILERO_MODEL_FILE))


class SileroOnnxModel:
    """
    Silero VAD (v5 ONNX graph) speech probability model.

    The session is single threaded; callers sharing one instance across
    threads must serialize access themselves.
    """

    def __init__(
        self,
        model_path: Optional[str] = None,
        log_level: OrtLogLevel = OrtLogLevel.WARN,
    ):
        """
        Load the ONNX session.

        Args:
            model_path: ONNX model file (default: weights shipped with silero-vad)
            log_level: onnxruntime log severity for this session
        """
        self._model_path = model_path or default_model_path()

        opts = ort.SessionOptions()
        opts.intra_op_num_threads = 1
        opts.inter_op_num_threads = 1
        opts.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
        opts.log_severity_level = log_level.value

        logger.info("Loading VAD model: %s", self._model_path)
        self._session: Optional[ort.InferenceSession] = ort.InferenceSession(
            self._model_path,
            sess_options=opts,
            providers=["CPUExecutionProvider"],
        )

    @property
    def model_path(self) -> str:
        return self._model_path

    def __call__(
        self,
        window: np.ndarray,
        sample_rate: int,
        state: RecurrentState,
    ) -> tuple[float, RecurrentState]:
        if self._session is None:
            raise ModelClosedError()

        if sample_rate not in SUPPORTED_SAMPLE_RATES:
            raise ValueError(f"unsupported sample rate: {sample_rate}")

        window = np.asarray(window, dtype=np.float32)
        expected = window_size_for(sample_rate)
        if window.ndim != 1 or window.shape[0] != expected:
            raise ValueError(f"expected a window of {expected} samples, got shape {window.shape}")

        x = np.concatenate([state.context, window])[np.newaxis, :]
        out, state_n = self._session.run(
            None,
            {
                "input": x,
                "state": state.state,
                "sr": np.array(sample_rate, dtype=np.int64),
            },
        )

        prob = float(np.asarray(out).reshape(-1)[0])
        new_state = RecurrentState(
            state=np.asarray(state_n, dtype=np.float32),
            context=x[0, -context_size_for(sample_rate):].copy(),
        )
        return prob, new_state

    def close(self) -> None:
        """Release the onnxruntime session."""
        if self._session is not None:
            logger.debug("Releasing VAD model session: %s", self._model_path)
        self._session = None
