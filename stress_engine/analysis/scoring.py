"""Stress Scoring

Maps whole-recording acoustic statistics to a bounded stress score and a vocal
emotion label with fixed, hand-calibrated formulas. One formula exists per
feature strategy; both share the insufficient-speech guard.

Scoring never raises: every statistics value, including empty or all-silent
recordings, yields a valid StressResult. Degraded estimates carry a warning.
"""

from stress_engine.models.enums import Emotion
from stress_engine.models.features import AggregateStatistics, RmsZcrStatistics, MfccStatistics
from stress_engine.models.results import StressResult, MAX_STRESS_SCORE


MIN_VOICED_RATIO = 0.15
SILENT_STRESS_SCORE = 0.10
INSUFFICIENT_SPEECH_WARNING = "Too little speech detected, please speak clearly for the whole recording."
SPECTRAL_UNAVAILABLE_WARNING = "Basic analysis only: spectral features were unavailable for this recording."

# RMS/ZCR calibration: RMS 0.18 is loud speech, ZCR 0.12 a high-tension voice
RMS_CEILING = 0.18
ZCR_CEILING = 0.12

# MFCC calibration for the stress magnitude
MAGNITUDE_CEILING = 20.0
ENERGY_CEILING = 150.0
VARIANCE_CEILING = 50.0
PITCH_CEILING = 12.0

# MFCC calibration for emotion classification (separate scale)
EMOTION_ENERGY_CEILING = 8.0
EMOTION_VARIANCE_CEILING = 0.5

MIN_SPEECH_STRESS = 0.05


def _normalize(value: float, ceiling: float) -> float:
    return min(value / ceiling, 1.0)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def silence_result(voiced_ratio: float) -> StressResult:
    """Low fixed estimate for recordings with too little speech."""
    return StressResult(
        emotion=Emotion.SILENT,
        stress_score=SILENT_STRESS_SCORE,
        confidence=voiced_ratio,
        warning=INSUFFICIENT_SPEECH_WARNING
    )


def rms_zcr_raw_stress(avg_rms: float, avg_zcr: float) -> float:
    """Weighted blend of normalised loudness and vocal tension."""
    return 0.55 * _normalize(avg_rms, RMS_CEILING) + 0.45 * _normalize(avg_zcr, ZCR_CEILING)


def score_rms_zcr(stats: RmsZcrStatistics) -> StressResult:
    """Score energy statistics.

    Loudness and tension each count as high above half their ceiling; the
    combination picks the emotion and its base score, and the raw blend adds
    up to 0.15 on top.
    """
    if stats.voiced_ratio < MIN_VOICED_RATIO:
        return silence_result(stats.voiced_ratio)

    norm_rms = _normalize(stats.avg_rms, RMS_CEILING)
    norm_zcr = _normalize(stats.avg_zcr, ZCR_CEILING)
    raw_stress = rms_zcr_raw_stress(stats.avg_rms, stats.avg_zcr)
    high_energy = norm_rms > 0.5
    high_zcr = norm_zcr > 0.5

    if high_energy and high_zcr:
        emotion, base = Emotion.STRESSED, 0.78
    elif high_energy:
        emotion, base = Emotion.EXCITED, 0.42
    elif high_zcr:
        emotion, base = Emotion.ANXIOUS, 0.60
    elif norm_rms < 0.20 and norm_zcr < 0.25:
        emotion, base = Emotion.CALM, 0.08
    else:
        emotion, base = Emotion.NEUTRAL, 0.32

    return StressResult(
        emotion=emotion,
        stress_score=min(base + 0.15 * raw_stress, MAX_STRESS_SCORE),
        confidence=round(stats.voiced_ratio, 2)
    )


def mfcc_fallback_result(voiced_ratio: float) -> StressResult:
    """Voiced-ratio-only estimate when no MFCC frames were collected."""
    return StressResult(
        emotion=Emotion.NEUTRAL if voiced_ratio > 0.5 else Emotion.SILENT,
        stress_score=min(0.3, 0.1 + 0.4 * voiced_ratio),
        confidence=voiced_ratio,
        warning=SPECTRAL_UNAVAILABLE_WARNING
    )


def mfcc_base_stress(stats: MfccStatistics) -> float:
    """Stress magnitude from cepstral statistics, before the emotion bias."""
    norm_magnitude = _normalize(stats.avg_magnitude, MAGNITUDE_CEILING)
    norm_energy = _normalize(abs(stats.avg_c0), ENERGY_CEILING)
    norm_variance = _normalize(stats.mid_band_variance, VARIANCE_CEILING)
    norm_pitch = _normalize(stats.avg_c1, PITCH_CEILING)

    base_stress = (
        0.35 * norm_magnitude +
        0.35 * norm_variance +
        0.15 * norm_energy +
        0.15 * norm_pitch
    )
    # Floor-boost any detected speech
    if base_stress < 0.1 and stats.avg_magnitude > 0.05:
        base_stress = max(0.1, base_stress * 1.5)
    return base_stress


def score_mfcc(stats: MfccStatistics) -> StressResult:
    """Score cepstral statistics.

    Emotion classification normalises energy (signed c0) and variance on its
    own scale, independent of the one used for the stress magnitude. Both
    computations are kept since merging them changes the output.
    """
    if stats.voiced_ratio < MIN_VOICED_RATIO:
        return silence_result(stats.voiced_ratio)

    if stats.mfcc_frame_count == 0:
        return mfcc_fallback_result(stats.voiced_ratio)

    base_stress = mfcc_base_stress(stats)

    norm_energy = _normalize(stats.avg_c0, EMOTION_ENERGY_CEILING)
    norm_variance = _normalize(stats.mid_band_variance, EMOTION_VARIANCE_CEILING)
    high_energy = norm_energy > 0.5
    high_variance = norm_variance > 0.5
    high_stress = base_stress > 0.6

    if high_stress and high_variance:
        emotion, bias = Emotion.STRESSED, 0.15
    elif high_energy and not high_stress:
        emotion, bias = Emotion.EXCITED, 0.0
    elif high_variance and not high_energy:
        emotion, bias = Emotion.ANXIOUS, 0.10
    elif base_stress < 0.20 and norm_energy < 0.25:
        emotion, bias = Emotion.CALM, max(-0.05, -base_stress * 0.2)
    else:
        emotion, bias = Emotion.NEUTRAL, 0.0

    return StressResult(
        emotion=emotion,
        stress_score=_clamp(base_stress + bias, MIN_SPEECH_STRESS, MAX_STRESS_SCORE),
        confidence=round(stats.voiced_ratio, 2)
    )


def score(stats: AggregateStatistics) -> StressResult:
    """Score statistics with the formula matching their strategy."""
    if isinstance(stats, MfccStatistics):
        return score_mfcc(stats)
    return score_rms_zcr(stats)
