"""Property-based tests for stress score bounds and determinism

Feature: voice-stress-estimation, Property: Score range and idempotence
"""

from hypothesis import given, strategies as st, settings

from stress_engine.analysis.scoring import score, INSUFFICIENT_SPEECH_WARNING
from stress_engine.models.enums import Emotion
from stress_engine.models.features import RmsZcrStatistics, MfccStatistics
from stress_engine.models.results import MAX_STRESS_SCORE


# Custom strategies for generating test data
@st.composite
def rms_zcr_statistics_strategy(draw, voiced_ratio=st.floats(min_value=0.0, max_value=1.0)):
    """Generate random RMS/ZCR statistics, including out-of-calibration values"""
    return RmsZcrStatistics(
        voiced_ratio=draw(voiced_ratio),
        frame_count=draw(st.integers(min_value=0, max_value=1000)),
        avg_rms=draw(st.floats(min_value=0.0, max_value=1.0)),
        avg_zcr=draw(st.floats(min_value=0.0, max_value=1.0))
    )


@st.composite
def mfcc_statistics_strategy(draw, voiced_ratio=st.floats(min_value=0.0, max_value=1.0)):
    """Generate random MFCC statistics, including the zero-usable-frame case"""
    return MfccStatistics(
        voiced_ratio=draw(voiced_ratio),
        frame_count=draw(st.integers(min_value=0, max_value=1000)),
        mfcc_frame_count=draw(st.integers(min_value=0, max_value=1000)),
        avg_magnitude=draw(st.floats(min_value=0.0, max_value=100.0)),
        avg_c0=draw(st.floats(min_value=-600.0, max_value=600.0)),
        mid_band_variance=draw(st.floats(min_value=0.0, max_value=200.0)),
        avg_c1=draw(st.floats(min_value=0.0, max_value=100.0))
    )


any_statistics = st.one_of(rms_zcr_statistics_strategy(), mfcc_statistics_strategy())
low_voicing = st.floats(min_value=0.0, max_value=0.15, exclude_max=True)


@settings(max_examples=100, deadline=None)
@given(stats=any_statistics)
def test_score_and_confidence_in_range(stats):
    """For any statistics, 0 <= stress <= 0.97 and 0 <= confidence <= 1"""
    result = score(stats)

    assert 0.0 <= result.stress_score <= MAX_STRESS_SCORE
    assert 0.0 <= result.confidence <= 1.0
    assert isinstance(result.emotion, Emotion)


@settings(max_examples=100, deadline=None)
@given(stats=st.one_of(
    rms_zcr_statistics_strategy(voiced_ratio=low_voicing),
    mfcc_statistics_strategy(voiced_ratio=low_voicing)
))
def test_low_voicing_always_silent(stats):
    """Below 15% voiced frames the output is the fixed silent estimate"""
    result = score(stats)

    assert result.emotion is Emotion.SILENT
    assert result.stress_score == 0.10
    assert result.confidence == stats.voiced_ratio
    assert result.warning == INSUFFICIENT_SPEECH_WARNING


@settings(max_examples=100, deadline=None)
@given(stats=any_statistics)
def test_scoring_is_idempotent(stats):
    """Scoring identical statistics twice yields identical results"""
    assert score(stats) == score(stats)


@settings(max_examples=100, deadline=None)
@given(stats=any_statistics)
def test_warning_only_on_degraded_paths(stats):
    result = score(stats)

    if result.warning is None:
        assert stats.voiced_ratio >= 0.15
        assert result.confidence == round(stats.voiced_ratio, 2)
