"""Main Application Entry Point

This module orchestrates one voice stress reading end to end: capture or
decode a recording, estimate vocal stress, and fuse it with the latest facial
stress score.

Capture and decode failures are logged and re-raised to the caller, who may
retry. Problems inside feature extraction never surface as exceptions; they
are reported through the result's warning and confidence.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from stress_engine.analysis.acoustic import AcousticStressAnalyzer
from stress_engine.fusion.fusion_engine import FusionEngine
from stress_engine.input.decoder import AudioDecoder, AudioSource, DecodeError
from stress_engine.input.recorder import MicrophoneRecorder, CaptureError
from stress_engine.models.enums import FeatureStrategy
from stress_engine.models.frames import Waveform
from stress_engine.models.results import SessionReading
from stress_engine.config.config_loader import config


logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure root logging to stdout and the configured log file."""
    level = level or config.get('logging.level', 'INFO')
    log_file = log_file or config.get('logging.file', 'logs/stress_engine.log')

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


class StressEngine:
    """Coordinates capture, decoding, acoustic analysis and fusion.

    Attributes:
        analyzer: Acoustic stress analyzer (strategy fixed at construction)
        decoder: Container decoder for uploaded recordings
        recorder: Microphone recorder for live recordings
        fusion_engine: Keeps the latest facial score and fused results
        recording_duration: Auto-stop duration matching the strategy
    """

    def __init__(
        self,
        strategy: Optional[Union[FeatureStrategy, str]] = None,
        face_score: Optional[float] = None,
        analyzer: Optional[AcousticStressAnalyzer] = None,
        decoder: Optional[AudioDecoder] = None,
        recorder: Optional[MicrophoneRecorder] = None
    ):
        logger.info("Initializing StressEngine...")

        self.analyzer = analyzer or AcousticStressAnalyzer(strategy=strategy)
        self.decoder = decoder or AudioDecoder()
        self.recording_duration = config.get(
            f'recording.duration.{self.analyzer.strategy.value}', 10.0
        )
        self.recorder = recorder or MicrophoneRecorder(duration=self.recording_duration)

        if face_score is None:
            face_score = config.get('fusion.default_face_score', 30)
        self.fusion_engine = FusionEngine(face_score=face_score)

        logger.info("StressEngine initialized successfully")

    @property
    def strategy(self) -> FeatureStrategy:
        return self.analyzer.strategy

    def update_face_score(self, face_score: float) -> None:
        self.fusion_engine.update_face_score(face_score)

    def analyze_waveform(self, waveform: Waveform) -> SessionReading:
        """Estimate vocal stress for a decoded recording and fuse it.

        Args:
            waveform: Decoded mono recording

        Returns:
            SessionReading with the stress result and face + speech fusion
        """
        result = self.analyzer.analyze(waveform)
        self.fusion_engine.update_speech_result(result)
        fusion = self.fusion_engine.get_latest_score()

        reading = SessionReading(
            stress_result=result,
            fusion=fusion,
            strategy=self.strategy,
            duration=waveform.duration
        )
        logger.info(f"Voice stress {result.speech_score}% ({result.emotion.value}), "
                    f"fusion {fusion.score}% ({fusion.level.label})")
        logger.debug(f"Reading: {reading.to_dict()}")
        return reading

    def analyze_file(self, source: AudioSource) -> SessionReading:
        """Decode and analyze a recorded container (path, bytes or file object).

        Raises:
            DecodeError: If the recording cannot be decoded
        """
        try:
            waveform = self.decoder.decode(source)
        except DecodeError as e:
            logger.error(f"Analysis failed: {e}")
            raise
        return self.analyze_waveform(waveform)

    def analyze_bytes(self, data: bytes) -> SessionReading:
        """Decode and analyze an in-memory recording, e.g. an uploaded blob."""
        return self.analyze_file(bytes(data))

    async def record_and_analyze(self, duration: Optional[float] = None) -> SessionReading:
        """Record from the microphone, then analyze the captured buffer.

        Raises:
            CaptureError: If the microphone is unavailable or already recording
        """
        try:
            waveform = await self.recorder.record(duration or self.recording_duration)
        except CaptureError as e:
            logger.error(f"Recording failed: {e}")
            raise
        return self.analyze_waveform(waveform)

    def stop_recording(self) -> None:
        """Stop the active recording early; analysis proceeds on what was captured."""
        self.recorder.stop()


def print_reading(reading: SessionReading) -> None:
    result = reading.stress_result
    print(f"Voice state:      {result.emotion.value}")
    print(f"Voice stress:     {result.speech_score}%")
    print(f"Speech detected:  {result.confidence * 100:.0f}%")
    if result.warning:
        print(f"Warning:          {result.warning}")
    print(f"Fusion:           {reading.fusion.score}% ({reading.fusion.level.label})")


async def main_async():
    """Async main entry point.

    Usage: python -m stress_engine.main [audio_path] [face_score]
    Without an audio path, a recording is taken from the microphone.
    """
    audio_path = sys.argv[1] if len(sys.argv) > 1 and sys.argv[1] != '-' else None
    face_score = float(sys.argv[2]) if len(sys.argv) > 2 else None

    if audio_path is not None and not Path(audio_path).exists():
        logger.error(f"Audio file not found: {audio_path}")
        logger.info("Usage: python -m stress_engine.main [audio_path|-] [face_score]")
        return

    engine = StressEngine(face_score=face_score)

    try:
        if audio_path is not None:
            reading = engine.analyze_file(audio_path)
        else:
            print(f"Recording {engine.recording_duration:.0f}s of speech...")
            reading = await engine.record_and_analyze()
    except (CaptureError, DecodeError) as e:
        print(f"Analysis failed: {e}")
        return

    print_reading(reading)


def main():
    """Main entry point."""
    try:
        config.validate()
        setup_logging()
        asyncio.run(main_async())
    except KeyboardInterrupt:
        logger.info("Application terminated by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
