"""Feature aggregation across a whole recording"""

from typing import Sequence
import numpy as np

from stress_engine.models.enums import FeatureStrategy
from stress_engine.models.features import (
    FrameFeatures,
    RmsZcrFeatures,
    MfccFeatures,
    RmsZcrStatistics,
    MfccStatistics,
    AggregateStatistics
)


def _voiced_ratio(features: Sequence[FrameFeatures]) -> float:
    if not features:
        return 0.0
    voiced = sum(1 for f in features if f.voiced)
    return voiced / len(features)


def aggregate_rms_zcr(features: Sequence[RmsZcrFeatures]) -> RmsZcrStatistics:
    """Average RMS and ZCR over all frames, voiced and unvoiced alike."""
    if not features:
        return RmsZcrStatistics(voiced_ratio=0.0, frame_count=0, avg_rms=0.0, avg_zcr=0.0)

    return RmsZcrStatistics(
        voiced_ratio=_voiced_ratio(features),
        frame_count=len(features),
        avg_rms=float(np.mean([f.rms for f in features])),
        avg_zcr=float(np.mean([f.zcr for f in features]))
    )


def aggregate_mfcc(features: Sequence[MfccFeatures]) -> MfccStatistics:
    """Summarise MFCC vectors of voiced frames.

    Unvoiced frames, and voiced frames without a usable vector, are excluded
    rather than zero-filled. With no usable frames the statistics stay at zero
    and mfcc_frame_count is 0, which the scorer treats as the degraded case.

    Statistics over the (frames x 13) coefficient matrix C:
        avg_c0            mean of C[:, 0] (signed)
        avg_magnitude     mean of |C[:, 1:13]| pooled
        mid_band_variance population variance of mean(|C[:, 2:7]|, axis=1)
        avg_c1            mean of |C[:, 1]|
    """
    vectors = [f.mfcc for f in features if f.usable]
    voiced_ratio = _voiced_ratio(features)

    if not vectors:
        return MfccStatistics(
            voiced_ratio=voiced_ratio,
            frame_count=len(features),
            mfcc_frame_count=0
        )

    matrix = np.vstack(vectors)
    magnitudes = np.abs(matrix)
    mid_band = magnitudes[:, 2:7].mean(axis=1)

    return MfccStatistics(
        voiced_ratio=voiced_ratio,
        frame_count=len(features),
        mfcc_frame_count=len(vectors),
        avg_magnitude=float(magnitudes[:, 1:13].mean()),
        avg_c0=float(matrix[:, 0].mean()),
        mid_band_variance=float(np.var(mid_band)),
        avg_c1=float(magnitudes[:, 1].mean())
    )


def aggregate(features: Sequence[FrameFeatures], strategy: FeatureStrategy) -> AggregateStatistics:
    """Aggregate per-frame features with the reducer matching the strategy."""
    if strategy is FeatureStrategy.RMS_ZCR:
        return aggregate_rms_zcr(features)
    if strategy is FeatureStrategy.MFCC:
        return aggregate_mfcc(features)
    raise ValueError(f"Unsupported feature strategy: {strategy}")
