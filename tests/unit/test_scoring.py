"""Unit tests for the stress scorer"""

import pytest

from stress_engine.analysis.scoring import (
    score,
    score_rms_zcr,
    score_mfcc,
    rms_zcr_raw_stress,
    mfcc_base_stress,
    INSUFFICIENT_SPEECH_WARNING,
    SPECTRAL_UNAVAILABLE_WARNING
)
from stress_engine.models.enums import Emotion
from stress_engine.models.features import RmsZcrStatistics, MfccStatistics


def rms_stats(avg_rms, avg_zcr, voiced_ratio=1.0):
    return RmsZcrStatistics(voiced_ratio=voiced_ratio, frame_count=100, avg_rms=avg_rms, avg_zcr=avg_zcr)


def mfcc_stats(avg_magnitude, avg_c0, mid_band_variance, avg_c1, voiced_ratio=1.0, mfcc_frame_count=100):
    return MfccStatistics(
        voiced_ratio=voiced_ratio,
        frame_count=100,
        mfcc_frame_count=mfcc_frame_count,
        avg_magnitude=avg_magnitude,
        avg_c0=avg_c0,
        mid_band_variance=mid_band_variance,
        avg_c1=avg_c1
    )


class TestSilenceGuard:
    """Tests for the insufficient-speech guard shared by both strategies"""

    def test_rms_zcr_guard(self):
        result = score(rms_stats(0.18, 0.12, voiced_ratio=0.1))

        assert result.emotion is Emotion.SILENT
        assert result.stress_score == 0.10
        assert result.confidence == 0.1
        assert result.warning == INSUFFICIENT_SPEECH_WARNING

    def test_mfcc_guard_precedes_fallback(self):
        result = score(mfcc_stats(0, 0, 0, 0, voiced_ratio=0.0, mfcc_frame_count=0))

        assert result.emotion is Emotion.SILENT
        assert result.stress_score == 0.10
        assert result.confidence == 0.0
        assert result.warning == INSUFFICIENT_SPEECH_WARNING

    def test_guard_boundary(self):
        """A voiced ratio of exactly 0.15 is scored normally"""
        result = score(rms_stats(0.05, 0.05, voiced_ratio=0.15))

        assert result.emotion is not Emotion.SILENT
        assert result.warning is None


class TestRmsZcrScoring:
    """Tests for the energy formula"""

    def test_stressed(self):
        """Loud high-frequency buzz: both normalised features saturate"""
        result = score_rms_zcr(rms_stats(0.18, 0.12))

        assert result.emotion is Emotion.STRESSED
        assert result.stress_score == pytest.approx(0.93)
        assert result.confidence == 1.0
        assert result.warning is None

    def test_excited(self):
        result = score_rms_zcr(rms_stats(0.18, 0.03))

        assert result.emotion is Emotion.EXCITED
        assert result.stress_score == pytest.approx(0.42 + 0.15 * (0.55 + 0.45 * 0.25))

    def test_anxious(self):
        result = score_rms_zcr(rms_stats(0.03, 0.12))

        assert result.emotion is Emotion.ANXIOUS
        assert result.stress_score == pytest.approx(0.60 + 0.15 * (0.55 / 6 + 0.45))

    def test_calm(self):
        result = score_rms_zcr(rms_stats(0.018, 0.024))

        assert result.emotion is Emotion.CALM
        assert result.stress_score == pytest.approx(0.08 + 0.15 * (0.55 * 0.1 + 0.45 * 0.2))

    def test_neutral(self):
        result = score_rms_zcr(rms_stats(0.054, 0.024))

        assert result.emotion is Emotion.NEUTRAL
        assert result.stress_score == pytest.approx(0.32 + 0.15 * (0.55 * 0.3 + 0.45 * 0.2))

    def test_confidence_rounded(self):
        result = score_rms_zcr(rms_stats(0.05, 0.05, voiced_ratio=0.456))

        assert result.confidence == 0.46

    def test_raw_stress_saturates(self):
        assert rms_zcr_raw_stress(0.18, 0.12) == pytest.approx(1.0)
        assert rms_zcr_raw_stress(1.0, 1.0) == pytest.approx(1.0)
        assert rms_zcr_raw_stress(0.0, 0.0) == 0.0


class TestMfccScoring:
    """Tests for the cepstral formula"""

    def test_fallback_without_mfcc_frames(self):
        result = score_mfcc(mfcc_stats(0, 0, 0, 0, voiced_ratio=0.8, mfcc_frame_count=0))

        assert result.emotion is Emotion.NEUTRAL
        assert result.stress_score == pytest.approx(0.3)
        assert result.confidence == 0.8
        assert result.warning == SPECTRAL_UNAVAILABLE_WARNING

    def test_fallback_low_voicing(self):
        result = score_mfcc(mfcc_stats(0, 0, 0, 0, voiced_ratio=0.3, mfcc_frame_count=0))

        assert result.emotion is Emotion.SILENT
        assert result.stress_score == pytest.approx(0.22)
        assert 0.1 <= result.stress_score <= 0.3
        assert result.warning == SPECTRAL_UNAVAILABLE_WARNING

    def test_stressed_capped(self):
        result = score_mfcc(mfcc_stats(20.0, 150.0, 50.0, 12.0))

        assert result.emotion is Emotion.STRESSED
        assert result.stress_score == pytest.approx(0.97)
        assert result.warning is None

    def test_excited(self):
        stats = mfcc_stats(4.0, 40.0, 0.1, 2.0)

        result = score_mfcc(stats)

        assert result.emotion is Emotion.EXCITED
        assert result.stress_score == pytest.approx(mfcc_base_stress(stats))
        assert result.stress_score == pytest.approx(0.35 * 0.2 + 0.35 * 0.002 + 0.15 * 40 / 150 + 0.15 * 2 / 12)

    def test_anxious(self):
        stats = mfcc_stats(10.0, 2.0, 1.0, 6.0)

        result = score_mfcc(stats)

        assert result.emotion is Emotion.ANXIOUS
        assert result.stress_score == pytest.approx(mfcc_base_stress(stats) + 0.10)

    def test_calm_with_floor_boost(self):
        stats = mfcc_stats(2.0, -10.0, 0.05, 1.0)

        assert mfcc_base_stress(stats) == pytest.approx(0.1)

        result = score_mfcc(stats)

        assert result.emotion is Emotion.CALM
        assert result.stress_score == pytest.approx(0.1 - 0.02)

    def test_neutral(self):
        stats = mfcc_stats(10.0, 2.0, 0.1, 6.0)

        result = score_mfcc(stats)

        assert result.emotion is Emotion.NEUTRAL
        assert result.stress_score == pytest.approx(mfcc_base_stress(stats))

    def test_minimum_speech_stress(self):
        result = score_mfcc(mfcc_stats(0.01, 0.0, 0.0, 0.0))

        assert result.emotion is Emotion.CALM
        assert result.stress_score == pytest.approx(0.05)

    def test_energy_scales_are_independent(self):
        """Signed c0 drives emotion; its magnitude drives stress"""
        stats = mfcc_stats(10.0, -100.0, 0.1, 6.0)

        result = score_mfcc(stats)

        assert mfcc_base_stress(stats) > mfcc_base_stress(mfcc_stats(10.0, 2.0, 0.1, 6.0))
        assert result.emotion is Emotion.NEUTRAL


def test_score_dispatches_on_statistics_type():
    assert score(rms_stats(0.18, 0.12)).emotion is Emotion.STRESSED
    assert score(mfcc_stats(20.0, 150.0, 50.0, 12.0)).emotion is Emotion.STRESSED
