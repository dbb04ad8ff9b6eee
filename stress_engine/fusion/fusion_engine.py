"""Fusion Engine

This module blends independently computed 0-100 stress estimates from
different modalities with fixed weights:

    - Face + speech fusion: 0.6 x facial score + 0.4 x speech score
    - Full fusion: 0.4 x facial score + 0.6 x wearable score

Weights never depend on the data. The engine keeps the latest input of each
modality and recomputes the fused scores whenever one of them changes.
"""

import logging
from typing import Dict, Optional

from stress_engine.models.results import StressResult, FusionScore, round_half_up


logger = logging.getLogger(__name__)


FACE_SPEECH_WEIGHT = 0.6    # facial share of face + speech fusion
FACE_WEARABLE_WEIGHT = 0.4  # facial share of full fusion

FACIAL_EMOTION_STRESS: Dict[str, int] = {
    'happy': 10,
    'calm': 5,
    'neutral': 25,
    'surprised': 45,
    'sad': 70,
    'angry': 90,
    'anxious': 85,
    'focused': 20,
}
DEFAULT_FACIAL_STRESS = 30

WEARABLE_STRESSED_SCORE = 75
WEARABLE_RELAXED_SCORE = 25


def fuse_scores(primary: float, secondary: float, primary_weight: float) -> FusionScore:
    """Blend two 0-100 scores with a fixed weight.

    Pure function: round-half-up of (w * primary + (1 - w) * secondary), clamped to
    [0, 100].

    Args:
        primary: Facial-expression score (0-100)
        secondary: Speech or wearable score (0-100)
        primary_weight: Weight of the primary score in [0, 1]

    Returns:
        FusionScore with the integer fused score and its inputs
    """
    secondary_weight = 1.0 - primary_weight
    fused = round_half_up(primary_weight * primary + secondary_weight * secondary)
    fused = max(0, min(100, fused))

    return FusionScore(
        score=fused,
        primary_score=primary,
        secondary_score=secondary,
        primary_weight=primary_weight,
        secondary_weight=secondary_weight
    )


def facial_emotion_stress(emotion: Optional[str]) -> int:
    """Map a facial-expression label to a 0-100 stress score."""
    if not emotion:
        return DEFAULT_FACIAL_STRESS
    return FACIAL_EMOTION_STRESS.get(emotion.lower(), DEFAULT_FACIAL_STRESS)


def wearable_prediction_score(prediction: int) -> int:
    """Map a binary wearable stress prediction (1 = stressed) to 0-100."""
    return WEARABLE_STRESSED_SCORE if prediction == 1 else WEARABLE_RELAXED_SCORE


def overall_stress(wearable_score: float, facial_score: float) -> int:
    """Unweighted mean of the wearable and facial scores."""
    return round_half_up((wearable_score + facial_score) / 2)


class FusionEngine:
    """Keeps the latest modality inputs and their fused scores.

    Attributes:
        face_score: Latest facial-expression score (0-100)
        speech_result: Latest voice stress result
        wearable_score: Latest wearable score (0-100)
        latest_speech_fusion: Face + speech fusion of the latest inputs
        latest_full_fusion: Face + wearable fusion of the latest inputs
    """

    def __init__(self, face_score: Optional[float] = None):
        self.face_score: Optional[float] = face_score
        self.speech_result: Optional[StressResult] = None
        self.wearable_score: Optional[float] = None

        self.latest_speech_fusion: Optional[FusionScore] = None
        self.latest_full_fusion: Optional[FusionScore] = None

        logger.info(f"FusionEngine initialized with face/speech={FACE_SPEECH_WEIGHT}/"
                    f"{1 - FACE_SPEECH_WEIGHT:.1f}, face/wearable={FACE_WEARABLE_WEIGHT}/"
                    f"{1 - FACE_WEARABLE_WEIGHT:.1f}")

    def fuse_speech(self, face_score: float, stress_result: StressResult) -> FusionScore:
        """Fuse a facial score with a voice stress result.

        Args:
            face_score: Facial-expression score (0-100)
            stress_result: Voice result; its stress score is scaled to 0-100

        Returns:
            FusionScore weighted 0.6 face / 0.4 speech
        """
        return fuse_scores(face_score, stress_result.speech_score, FACE_SPEECH_WEIGHT)

    def fuse_wearable(self, face_score: float, wearable_score: float) -> FusionScore:
        """Fuse a facial score with a wearable score (0.4 face / 0.6 wearable)."""
        return fuse_scores(face_score, wearable_score, FACE_WEARABLE_WEIGHT)

    def _refresh(self) -> None:
        if self.face_score is None:
            return
        if self.speech_result is not None:
            self.latest_speech_fusion = self.fuse_speech(self.face_score, self.speech_result)
            logger.debug(f"Face + speech fusion: {self.latest_speech_fusion.score}")
        if self.wearable_score is not None:
            self.latest_full_fusion = self.fuse_wearable(self.face_score, self.wearable_score)
            logger.debug(f"Full fusion: {self.latest_full_fusion.score}")

    def update_face_score(self, face_score: float) -> None:
        self.face_score = face_score
        self._refresh()

    def update_facial_emotion(self, emotion: str) -> None:
        """Record a facial-expression label via its mapped stress score."""
        self.update_face_score(facial_emotion_stress(emotion))

    def update_speech_result(self, stress_result: StressResult) -> None:
        self.speech_result = stress_result
        self._refresh()

    def update_wearable_score(self, wearable_score: float) -> None:
        self.wearable_score = wearable_score
        self._refresh()

    def get_latest_score(self) -> Optional[FusionScore]:
        """Get the most recent face + speech fusion.

        Returns:
            Latest FusionScore, or None until both a face score and a speech
            result are available
        """
        return self.latest_speech_fusion
