"""Run vad-tester over one audio file with a set of parameter presets."""

import argparse

from vad_segmenter.cli import main as vad_tester

# name, threshold, neg_threshold, min_silence_ms, min_speech_ms, speech_pad_ms
PRESETS = [
    ("Base parameters", 0.5, 0.0, 500, 250, 30),
    ("Low speech threshold", 0.3, 0.0, 500, 250, 30),
    ("High speech threshold", 0.7, 0.0, 500, 250, 30),
    ("Low negative threshold", 0.5, 0.2, 500, 250, 30),
    ("High negative threshold", 0.5, 0.4, 500, 250, 30),
    ("Short minimum silence duration", 0.5, 0.0, 200, 250, 30),
    ("Long minimum silence duration", 0.5, 0.0, 1000, 250, 30),
    ("Short minimum speech duration", 0.5, 0.0, 500, 100, 30),
    ("Long minimum speech duration", 0.5, 0.0, 500, 500, 30),
    ("No padding for speech segments", 0.5, 0.0, 500, 250, 0),
    ("Large padding for speech segments", 0.5, 0.0, 500, 250, 100),
]


def main():
    parser = argparse.ArgumentParser(description="Compare VAD parameter presets")
    parser.add_argument("--model", type=str, help="Path to Silero VAD model (default: bundled model)")
    parser.add_argument("--audio", type=str, default="testfiles/samples2.pcm", help="Path to PCM audio file")
    parser.add_argument("--sr", type=int, default=16000, help="Sample rate (8000 or 16000)")
    args = parser.parse_args()

    failures = 0
    for name, threshold, neg_threshold, min_silence, min_speech, speech_pad in PRESETS:
        print("=" * 60)
        print(f"Test: {name}")
        print("-" * 60)
        print("Parameters:")
        print(f"  Threshold: {threshold}")
        print(f"  Negative Threshold: {neg_threshold}")
        print(f"  Min Silence Duration: {min_silence} ms")
        print(f"  Min Speech Duration: {min_speech} ms")
        print(f"  Speech Pad: {speech_pad} ms")
        print("-" * 60)

        argv = [
            "--audio", args.audio,
            "--sr", str(args.sr),
            "--threshold", str(threshold),
            "--neg-threshold", str(neg_threshold),
            "--min-silence", str(min_silence),
            "--min-speech", str(min_speech),
            "--speech-pad", str(speech_pad),
        ]
        if args.model:
            argv += ["--model", args.model]
        if vad_tester(argv) != 0:
            failures += 1

        print("=" * 60)
        print()

    print("All tests completed!")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
