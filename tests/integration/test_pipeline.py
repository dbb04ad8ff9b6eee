"""
Integration tests for the end-to-end voice stress pipeline.

Covers:
- Silence, buzz and speech-like recordings through both strategies
- Container decoding through the orchestrator
- Fusion of the voice estimate with facial and wearable inputs
- Degraded spectral analysis without exceptions
"""

import pytest
import numpy as np

from stress_engine.main import StressEngine
from stress_engine.analysis.acoustic import AcousticStressAnalyzer
from stress_engine.fusion.fusion_engine import FusionEngine, wearable_prediction_score, overall_stress
from stress_engine.input import synthetic
from stress_engine.input.decoder import AudioDecoder
from stress_engine.models.enums import Emotion, FeatureStrategy, StressLevel


@pytest.mark.parametrize("strategy", list(FeatureStrategy))
def test_ten_seconds_of_silence(strategy):
    """10 s of zeros at 16 kHz is reported as silent"""
    analyzer = AcousticStressAnalyzer(strategy=strategy)

    result = analyzer.analyze(synthetic.silence(10.0, sample_rate=16000))

    assert analyzer.latest_statistics.frame_count == 156
    assert analyzer.latest_statistics.voiced_ratio == 0.0
    assert result.emotion is Emotion.SILENT
    assert result.stress_score == 0.10
    assert result.warning


def test_loud_buzz_is_stressed():
    analyzer = AcousticStressAnalyzer(strategy=FeatureStrategy.RMS_ZCR)

    result = analyzer.analyze(synthetic.buzz(10.0))

    stats = analyzer.latest_statistics
    assert stats.avg_rms == pytest.approx(0.18, rel=1e-3)
    assert stats.avg_zcr > 0.12
    assert result.emotion is Emotion.STRESSED
    assert 0.78 <= result.stress_score <= 0.97


def test_quiet_tone_is_calm():
    """A quiet low-pitched tone has low energy and few crossings"""
    analyzer = AcousticStressAnalyzer(strategy=FeatureStrategy.RMS_ZCR)

    result = analyzer.analyze(synthetic.tone(10.0, frequency=120.0, amplitude=0.02))

    assert result.emotion is Emotion.CALM
    assert result.stress_score < 0.15
    assert result.confidence == 1.0


@pytest.mark.parametrize("strategy", list(FeatureStrategy))
def test_speech_like_recording(strategy):
    analyzer = AcousticStressAnalyzer(strategy=strategy)

    result = analyzer.analyze(synthetic.speech_like(10.0, seed=7))

    assert result.emotion is not Emotion.SILENT
    assert result.warning is None
    assert 0.05 <= result.stress_score <= 0.97
    assert 0.15 <= result.confidence <= 1.0


def test_synthetic_signals_are_reproducible():
    first = synthetic.speech_like(2.0, seed=11)
    second = synthetic.speech_like(2.0, seed=11)

    np.testing.assert_array_equal(first.samples, second.samples)


def test_malformed_mfcc_every_frame():
    """Wrong coefficient counts for every frame give the basic estimate"""
    analyzer = AcousticStressAnalyzer(
        strategy=FeatureStrategy.MFCC,
        mfcc_transform=lambda frame, cfg: np.zeros(cfg.n_mfcc + 1)
    )

    result = analyzer.analyze(synthetic.speech_like(8.0, seed=1))

    assert 0.1 <= result.stress_score <= 0.3
    assert result.warning
    assert analyzer.latest_statistics.mfcc_frame_count == 0


def test_decoded_recording_through_engine(make_wav):
    waveform = synthetic.buzz(10.0)
    engine = StressEngine(strategy=FeatureStrategy.RMS_ZCR, face_score=30)

    reading = engine.analyze_bytes(make_wav(waveform.samples, waveform.sample_rate))

    assert reading.stress_result.emotion is Emotion.STRESSED
    assert reading.fusion.score == 55
    assert reading.duration == pytest.approx(10.0, abs=0.01)

    record = reading.to_record()
    assert record['speech_emotion'] == 'stressed'
    assert record['fusion_stress_score'] == 55
    assert record['stress_level'] == 'moderate'


def test_decoder_and_analyzer_agree_with_direct_analysis(make_wav):
    waveform = synthetic.tone(10.0, frequency=220.0, amplitude=0.1)
    analyzer = AcousticStressAnalyzer(strategy=FeatureStrategy.RMS_ZCR)

    direct = analyzer.analyze(waveform)
    decoded = analyzer.analyze(AudioDecoder().decode(make_wav(waveform.samples, waveform.sample_rate)))

    assert decoded.emotion is direct.emotion
    assert decoded.stress_score == pytest.approx(direct.stress_score, abs=0.01)


def test_full_session_fusion():
    """Voice, face and wearable inputs combine as the dashboard shows them"""
    analyzer = AcousticStressAnalyzer(strategy=FeatureStrategy.RMS_ZCR)
    fusion = FusionEngine()

    fusion.update_facial_emotion("anxious")
    fusion.update_speech_result(analyzer.analyze(synthetic.buzz(10.0)))
    fusion.update_wearable_score(wearable_prediction_score(1))

    # 0.6 x 85 + 0.4 x 93 = 88.2
    assert fusion.get_latest_score().score == 88
    assert fusion.get_latest_score().level is StressLevel.HIGH
    # 0.4 x 85 + 0.6 x 75 = 79
    assert fusion.latest_full_fusion.score == 79
    assert overall_stress(75, 85) == 80
