"""Data models for analysis and fusion results"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import math
import time

from stress_engine.models.enums import Emotion, FeatureStrategy, StressLevel


MAX_STRESS_SCORE = 0.97


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class StressResult:
    """Result of analysing one recording

    Attributes:
        emotion: Vocal emotion label
        stress_score: Stress estimate in [0, 0.97]
        confidence: Fraction of voiced speech in the recording [0, 1]
        warning: User-facing note when the estimate is degraded
    """
    emotion: Emotion
    stress_score: float
    confidence: float
    warning: Optional[str] = None

    def __post_init__(self):
        """Validate result data"""
        assert 0.0 <= self.stress_score <= MAX_STRESS_SCORE, \
            f"Stress score must be in [0, {MAX_STRESS_SCORE}]"
        assert 0.0 <= self.confidence <= 1.0, "Confidence must be in [0, 1]"

    @property
    def speech_score(self) -> int:
        """Stress score on the 0-100 scale used for fusion"""
        return round_half_up(self.stress_score * 100)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'emotion': self.emotion.value,
            'stress_score': self.stress_score,
            'confidence': self.confidence,
            'warning': self.warning,
        }


@dataclass(frozen=True)
class FusionScore:
    """Fixed-weight blend of two 0-100 stress estimates

    Attributes:
        score: Fused integer score in [0, 100]
        primary_score: Facial-expression score (0-100)
        secondary_score: Speech or wearable score (0-100)
        primary_weight: Weight of the facial score
        secondary_weight: Weight of the other modality
    """
    score: int
    primary_score: float
    secondary_score: float
    primary_weight: float
    secondary_weight: float

    def __post_init__(self):
        """Validate fusion score"""
        assert 0 <= self.score <= 100, "Fusion score must be in [0, 100]"
        assert abs(self.primary_weight + self.secondary_weight - 1.0) < 1e-9, \
            "Fusion weights must sum to 1"

    @property
    def level(self) -> StressLevel:
        return StressLevel.from_score(self.score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'level': self.level.value,
            'primary_score': self.primary_score,
            'secondary_score': self.secondary_score,
            'weights': [self.primary_weight, self.secondary_weight],
        }


@dataclass
class SessionReading:
    """One analysed recording together with its face + speech fusion

    Attributes:
        stress_result: Voice stress estimate
        fusion: Face + speech fusion at the time of analysis
        strategy: Feature strategy that produced the estimate
        duration: Length of the analysed recording in seconds
        timestamp: When the reading was produced (seconds since epoch)
    """
    stress_result: StressResult
    fusion: FusionScore
    strategy: FeatureStrategy
    duration: float
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'voice': self.stress_result.to_dict(),
            'fusion': self.fusion.to_dict(),
            'strategy': self.strategy.value,
            'duration': self.duration,
            'timestamp': self.timestamp,
        }

    def to_record(self) -> Dict[str, Any]:
        """Flatten into the row shape logged to the external datastore"""
        return {
            'speech_emotion': self.stress_result.emotion.value,
            'speech_stress_score': self.stress_result.speech_score,
            'speech_confidence': self.stress_result.confidence,
            'speech_warning': self.stress_result.warning,
            'facial_stress_score': self.fusion.primary_score,
            'fusion_stress_score': self.fusion.score,
            'stress_level': self.fusion.level.value,
            'strategy': self.strategy.value,
            'duration': round(self.duration, 2),
            'timestamp': self.timestamp,
        }
