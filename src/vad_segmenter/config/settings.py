import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from dotenv import load_dotenv
import logging

from ..speech.types import DetectorConfig, OrtLogLevel

logger = logging.getLogger(__name__)

class SegmenterSettings(BaseModel):
    model_path: Optional[str] = Field(default=None, description="Path to the Silero VAD ONNX model (unset = model bundled with silero-vad)")
    sample_rate: int = Field(default=16000, description="Sample rate of the input audio (8000 or 16000)")
    threshold: float = Field(default=0.5, gt=0, lt=1, description="Speech detection probability threshold")
    negative_threshold: float = Field(default=0.0, ge=0, lt=1, description="Silence detection probability threshold (0 = threshold - 0.15)")
    min_silence_duration_ms: int = Field(default=500, ge=0, description="Silence duration required to close a speech segment")
    min_speech_duration_ms: int = Field(default=250, ge=0, description="Shorter speech segments are filtered out")
    speech_pad_ms: int = Field(default=30, ge=0, description="Padding added to both ends of every speech segment")
    ort_log_level: str = Field(default="error", description="onnxruntime log level (verbose, info, warn, error, fatal)")
    log_level: str = Field(default="INFO", description="Logging level")

    # model_path would otherwise clash with pydantic's "model_" namespace
    model_config = ConfigDict(protected_namespaces=())

    def to_detector_config(self) -> DetectorConfig:
        return DetectorConfig(
            sample_rate=self.sample_rate,
            threshold=self.threshold,
            negative_threshold=self.negative_threshold,
            min_silence_duration_ms=self.min_silence_duration_ms,
            min_speech_duration_ms=self.min_speech_duration_ms,
            speech_pad_ms=self.speech_pad_ms,
            model_path=self.model_path,
            log_level=OrtLogLevel.from_name(self.ort_log_level),
        )

def load_settings(config_path: Optional[Path] = None) -> SegmenterSettings:
    if config_path is None:
        config_path = Path(".env")

    if config_path.exists():
        load_dotenv(config_path)
        logger.info(f"Loaded environment variables from {config_path}")
    else:
        logger.debug(f"Config file {config_path} not found, using environment variables only")

    try:
        settings = SegmenterSettings(
            model_path=os.getenv("VAD_MODEL_PATH") or None,
            sample_rate=int(os.getenv("VAD_SAMPLE_RATE", "16000")),
            threshold=float(os.getenv("VAD_THRESHOLD", "0.5")),
            negative_threshold=float(os.getenv("VAD_NEGATIVE_THRESHOLD", "0.0")),
            min_silence_duration_ms=int(os.getenv("VAD_MIN_SILENCE_MS", "500")),
            min_speech_duration_ms=int(os.getenv("VAD_MIN_SPEECH_MS", "250")),
            speech_pad_ms=int(os.getenv("VAD_SPEECH_PAD_MS", "30")),
            ort_log_level=os.getenv("VAD_ORT_LOG_LEVEL", "error"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

        # Fail early on a typo rather than when the model is loaded.
        OrtLogLevel.from_name(settings.ort_log_level)

        return settings

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

def create_example_env_file(path: Path = Path(".env.example")):
    example_content = """# Path to the Silero VAD ONNX model (leave unset to use the model bundled with silero-vad)
# VAD_MODEL_PATH=testfiles/silero_vad.onnx

# Sample rate of the input audio: 8000 or 16000
VAD_SAMPLE_RATE=16000

# Speech detection probability threshold, in (0, 1)
VAD_THRESHOLD=0.5

# Silence detection probability threshold, in [0, 1) (0 = threshold - 0.15)
VAD_NEGATIVE_THRESHOLD=0.0

# Silence duration required to close a speech segment (ms)
VAD_MIN_SILENCE_MS=500

# Minimum duration of a kept speech segment (ms)
VAD_MIN_SPEECH_MS=250

# Padding added to both ends of every speech segment (ms)
VAD_SPEECH_PAD_MS=30

# onnxruntime log level: verbose, info, warn, error, fatal
VAD_ORT_LOG_LEVEL=error

# Logging level
LOG_LEVEL=INFO
"""

    with open(path, "w") as f:
        f.write(example_content)

    logger.info(f"Created example environment file at {path}")

def setup_logging(log_level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
