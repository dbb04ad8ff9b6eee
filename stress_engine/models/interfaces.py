"""Base interfaces for analysis components"""

from abc import ABC, abstractmethod
import numpy as np

from stress_engine.models.enums import FeatureStrategy
from stress_engine.models.features import FrameFeatures


class FeatureExtractor(ABC):
    """Extracts acoustic features from one analysis frame

    Attributes:
        strategy: Feature strategy implemented by this extractor
    """

    strategy: FeatureStrategy

    @abstractmethod
    def extract_frame(self, frame: np.ndarray) -> FrameFeatures:
        """Extract features from a single frame

        Args:
            frame: 1-D array of frame samples

        Returns:
            Per-frame features including the voiced flag
        """
        pass
