"""Errors raised by the speech detector."""


class DetectorError(Exception):
    """Base class for speech detector errors."""


class InvalidConfigError(DetectorError, ValueError):
    """Raised when a DetectorConfig violates one of its constraints."""


class InsufficientSamplesError(DetectorError):
    """Raised when the buffer passed to detect() is shorter than one window."""

    def __init__(self, message: str = "not enough samples"):
        super().__init__(message)


class UnexpectedSpeechEndError(DetectorError):
    """Raised when silence closes a segment that was never opened in this call."""

    def __init__(self, message: str = "unexpected speech end"):
        super().__init__(message)


class ModelClosedError(DetectorError):
    """Raised when a closed model is asked for inference."""

    def __init__(self, message: str = "model is closed"):
        super().__init__(message)
