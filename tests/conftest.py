import pytest
import os

import numpy as np

from vad_segmenter.speech.model import RecurrentState


class EchoModel:
    """
    Speech model stand-in: the probability of a window is its first sample.

    Lets tests write a probability trace straight into the PCM buffer, so the
    same buffer always replays the same trace. Each call bumps the recurrent
    state by one so tests can follow how it is threaded.
    """

    def __init__(self):
        self.calls = 0
        self.window_sizes: list[int] = []
        self.seen_states: list[float] = []

    def __call__(self, window, sample_rate, state):
        self.calls += 1
        self.window_sizes.append(len(window))
        self.seen_states.append(float(state.state.flat[0]))
        new_state = RecurrentState(state=state.state + 1, context=state.context)
        return float(window[0]), new_state


def pcm_from_trace(trace, window_size=512, tail=0, tail_value=0.0):
    """Build a buffer whose i-th window yields trace[i] from EchoModel."""
    pcm = np.repeat(np.asarray(trace, dtype=np.float32), window_size)
    if tail:
        pcm = np.concatenate([pcm, np.full(tail, tail_value, dtype=np.float32)])
    return pcm


@pytest.fixture
def echo_model():
    return EchoModel()


@pytest.fixture
def make_pcm():
    return pcm_from_trace


@pytest.fixture
def reference_pcm():
    """
    5 s at 16 kHz (156 windows + 128 trailing samples): speech from windows
    33, 90 and 139, silence confirmed at windows 50 and 100.
    """
    trace = (
        [0.1] * 33 +   # 0..32
        [0.9] * 17 +   # 33..49
        [0.1] * 40 +   # 50..89
        [0.9] * 10 +   # 90..99
        [0.1] * 39 +   # 100..138
        [0.9] * 17     # 139..155
    )
    return pcm_from_trace(trace, tail=128, tail_value=0.9)


@pytest.fixture
def clean_env():
    """Run with no VAD_* / LOG_LEVEL variables set."""
    original_env = os.environ.copy()

    for key in list(os.environ):
        if key.startswith("VAD_") or key == "LOG_LEVEL":
            del os.environ[key]

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
