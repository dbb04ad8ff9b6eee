"""Data models and interfaces"""

from stress_engine.models.frames import Waveform
from stress_engine.models.features import (
    RmsZcrFeatures,
    MfccFeatures,
    FrameFeatures,
    RmsZcrStatistics,
    MfccStatistics,
    AggregateStatistics
)
from stress_engine.models.results import (
    StressResult,
    FusionScore,
    SessionReading,
    MAX_STRESS_SCORE
)
from stress_engine.models.enums import FeatureStrategy, Emotion, StressLevel
from stress_engine.models.interfaces import FeatureExtractor

__all__ = [
    # Audio
    "Waveform",
    # Features
    "RmsZcrFeatures",
    "MfccFeatures",
    "FrameFeatures",
    "RmsZcrStatistics",
    "MfccStatistics",
    "AggregateStatistics",
    # Results
    "StressResult",
    "FusionScore",
    "SessionReading",
    "MAX_STRESS_SCORE",
    # Enums
    "FeatureStrategy",
    "Emotion",
    "StressLevel",
    # Interfaces
    "FeatureExtractor",
]
