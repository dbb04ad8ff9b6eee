"""Enumerations for feature strategies, emotions and stress bands"""

from enum import Enum


class FeatureStrategy(Enum):
    """Acoustic feature extraction strategies"""
    RMS_ZCR = "rms_zcr"  # RMS energy + zero-crossing rate
    MFCC = "mfcc"        # Mel-frequency cepstral coefficients


class Emotion(Enum):
    """Vocal emotion labels produced by the stress scorer"""
    CALM = "calm"
    NEUTRAL = "neutral"
    EXCITED = "excited"
    ANXIOUS = "anxious"
    STRESSED = "stressed"
    SILENT = "silent"


class StressLevel(Enum):
    """Display band for a 0-100 stress score"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def from_score(cls, score: float) -> "StressLevel":
        """Band a 0-100 score: below 30 is low, below 60 moderate, otherwise high."""
        if score < 30:
            return cls.LOW
        if score < 60:
            return cls.MODERATE
        return cls.HIGH

    @property
    def label(self) -> str:
        return f"{self.value.title()} Stress"
