"""vad-tester: run speech detection over a raw float32 PCM file."""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from .config.settings import SegmenterSettings, create_example_env_file, load_settings, setup_logging
from .speech import Detector, DetectorConfig, Segment

logger = logging.getLogger("vad_tester")


def read_pcm_file(path: Path) -> np.ndarray:
    """
    Read little-endian float32 mono PCM samples.

    A trailing partial sample (file size not a multiple of 4) is ignored.
    """
    data = Path(path).read_bytes()
    usable = len(data) - len(data) % 4
    return np.frombuffer(data[:usable], dtype="<f4").astype(np.float32)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vad-tester", description="Silero VAD speech segment tester")
    parser.add_argument("--model", type=str, help="Path to Silero VAD model (default: bundled model)")
    parser.add_argument("--audio", type=str, default="testfiles/samples.pcm", help="Path to PCM audio file (float32 LE)")
    parser.add_argument("--sr", type=int, help="Sample rate (8000 or 16000)")
    parser.add_argument("--threshold", type=float, help="Speech detection probability threshold")
    parser.add_argument("--neg-threshold", type=float, help="Silence detection probability threshold (0 = auto)")
    parser.add_argument("--min-silence", type=int, help="Minimum silence duration (ms)")
    parser.add_argument("--min-speech", type=int, help="Minimum speech duration (ms)")
    parser.add_argument("--speech-pad", type=int, help="Speech segments padding (ms)")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--config", type=str, help="Path to config file", default=".env")
    parser.add_argument("--create-config", action="store_true", help="Create example config file")
    return parser


def _detector_config(args: argparse.Namespace, settings: SegmenterSettings) -> DetectorConfig:
    """Command line flags override settings loaded from the environment."""
    flags = {
        "sample_rate": args.sr,
        "threshold": args.threshold,
        "negative_threshold": args.neg_threshold,
        "min_silence_duration_ms": args.min_silence,
        "min_speech_duration_ms": args.min_speech,
        "speech_pad_ms": args.speech_pad,
        "model_path": args.model,
    }
    overrides = {name: value for name, value in flags.items() if value is not None}
    return replace(settings.to_detector_config(), **overrides)


def print_report(segments: list[Segment], audio_duration_s: float) -> None:
    print("\nDetected speech segments:")
    print("------------------------")
    total_speech_s = 0.0
    for i, segment in enumerate(segments, start=1):
        if segment.is_open:
            print(f"{i}. {segment.speech_start_at:.2f} - [unfinished segment]")
            continue
        total_speech_s += segment.duration
        print(f"{i}. {segment.speech_start_at:.2f} - {segment.speech_end_at:.2f} ({segment.duration:.2f} sec)")

    print(f"\nTotal audio duration: {audio_duration_s:.2f} sec")
    share = (total_speech_s / audio_duration_s) * 100 if audio_duration_s > 0 else 0.0
    print(f"Total speech duration: {total_speech_s:.2f} sec ({share:.1f}%)")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.create_config:
        create_example_env_file()
        print("Example configuration file created at .env.example")
        print("Copy it to .env and adjust the detector parameters.")
        return 0

    try:
        settings = load_settings(Path(args.config) if args.config else None)
        setup_logging("DEBUG" if args.verbose else settings.log_level)
        cfg = _detector_config(args, settings)
        cfg.validate()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1

    logger.info("Loading audio file, path=%s", args.audio)
    try:
        samples = read_pcm_file(Path(args.audio))
    except OSError as e:
        logger.error("Failed to load audio file: %s", e)
        return 1
    audio_duration_s = samples.shape[0] / cfg.sample_rate
    logger.info("Audio file loaded, samples=%d, duration=%.2f sec", samples.shape[0], audio_duration_s)

    logger.info("Creating speech detector")
    started_at = time.perf_counter()
    try:
        detector = Detector(cfg)
    except Exception as e:
        logger.error("Failed to create detector: %s", e)
        return 1
    logger.info("Detector created, elapsed=%.3fs", time.perf_counter() - started_at)

    with detector:
        resolved = detector.config
        logger.info(
            "Starting speech detection, threshold=%.2f, neg_threshold=%.2f, min_silence=%d, min_speech=%d, speech_pad=%d",
            resolved.threshold,
            resolved.negative_threshold,
            resolved.min_silence_duration_ms,
            resolved.min_speech_duration_ms,
            resolved.speech_pad_ms,
        )

        started_at = time.perf_counter()
        try:
            segments = detector.detect(samples)
        except Exception as e:
            logger.error("Speech detection failed: %s", e)
            return 1
        elapsed = time.perf_counter() - started_at

    rtf = elapsed / audio_duration_s if audio_duration_s > 0 else 0.0
    logger.info("Speech detection completed, segments=%d, elapsed=%.3fs, rtf=%.4f", len(segments), elapsed, rtf)

    print_report(segments, audio_duration_s)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
