"""Data models for per-frame features and whole-recording statistics"""

from dataclasses import dataclass
from typing import Optional, Union
import numpy as np


@dataclass(frozen=True)
class RmsZcrFeatures:
    """Energy features of one analysis frame

    Attributes:
        rms: Root-mean-square energy of the frame
        zcr: Fraction of adjacent-sample sign changes per frame sample
        voiced: Whether the frame RMS exceeds the silence threshold
    """
    rms: float
    zcr: float
    voiced: bool


@dataclass(frozen=True, eq=False)
class MfccFeatures:
    """Cepstral features of one analysis frame

    Attributes:
        rms: Root-mean-square energy of the raw frame samples
        voiced: Whether the frame RMS exceeds the silence threshold
        mfcc: Mel-frequency cepstral coefficients, or None when the frame is
              unvoiced or the spectral transform produced no usable vector
    """
    rms: float
    voiced: bool
    mfcc: Optional[np.ndarray] = None

    @property
    def usable(self) -> bool:
        """True if this frame contributes to MFCC aggregation"""
        return self.voiced and self.mfcc is not None


FrameFeatures = Union[RmsZcrFeatures, MfccFeatures]


@dataclass(frozen=True)
class RmsZcrStatistics:
    """Whole-recording summary for the RMS/ZCR strategy

    Attributes:
        voiced_ratio: Fraction of frames marked voiced [0, 1]
        frame_count: Number of analysed frames
        avg_rms: Mean RMS across all frames
        avg_zcr: Mean zero-crossing rate across all frames
    """
    voiced_ratio: float
    frame_count: int
    avg_rms: float
    avg_zcr: float

    def __post_init__(self):
        assert 0.0 <= self.voiced_ratio <= 1.0, "Voiced ratio must be in [0, 1]"


@dataclass(frozen=True)
class MfccStatistics:
    """Whole-recording summary for the MFCC strategy

    All cepstral statistics are computed over voiced frames with a usable
    MFCC vector only.

    Attributes:
        voiced_ratio: Fraction of frames marked voiced [0, 1]
        frame_count: Number of analysed frames
        mfcc_frame_count: Number of frames that contributed an MFCC vector
        avg_magnitude: Mean |c_i| for i=1..12 pooled over frames
        avg_c0: Signed mean of c0 (log-energy)
        mid_band_variance: Variance across frames of the mean |c_i|, i=2..6
        avg_c1: Mean |c_1| (pitch proxy)
    """
    voiced_ratio: float
    frame_count: int
    mfcc_frame_count: int
    avg_magnitude: float = 0.0
    avg_c0: float = 0.0
    mid_band_variance: float = 0.0
    avg_c1: float = 0.0

    def __post_init__(self):
        assert 0.0 <= self.voiced_ratio <= 1.0, "Voiced ratio must be in [0, 1]"
        assert self.mfcc_frame_count >= 0, "MFCC frame count must be non-negative"


AggregateStatistics = Union[RmsZcrStatistics, MfccStatistics]
