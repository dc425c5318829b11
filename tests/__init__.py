"""
VAD Segmenter Tests
===================

This package contains unit tests for the speech segment detector.

Test Structure:
- test_types.py: Tests for DetectorConfig validation, defaults and Segment
- test_detector.py: Tests for the segmentation state machine
- test_model.py: Tests for the Silero ONNX inference model
- test_config.py: Tests for settings loaded from .env / environment
- test_cli.py: Tests for the vad-tester command line tool
- conftest.py: Shared test fixtures and setup

To run tests:
    pytest tests/

To run with coverage:
    pytest tests/ --cov=src/vad_segmenter

To run specific test file:
    pytest tests/test_detector.py
"""
