"""Acoustic Stress Analysis Module

This module turns a decoded voice recording into a stress estimate. The whole
recording is analysed offline once capture has finished:

    waveform -> frames -> per-frame features -> aggregate statistics -> StressResult

The feature strategy (RMS/ZCR or MFCC) is fixed when the analyzer is built.
Feature-level problems never raise; they surface as a warning and a reduced
confidence on the result.
"""

import logging
from typing import List, Optional, Union

from stress_engine.analysis.segmentation import segment_frames
from stress_engine.analysis.features import create_extractor, MfccExtractor, MfccTransform
from stress_engine.analysis.aggregation import aggregate
from stress_engine.analysis.scoring import score
from stress_engine.models.enums import FeatureStrategy
from stress_engine.models.features import FrameFeatures, AggregateStatistics
from stress_engine.models.frames import Waveform
from stress_engine.models.results import StressResult
from stress_engine.config.config_loader import config


class AcousticStressAnalyzer:
    """Estimates vocal stress from a complete recording.

    Attributes:
        strategy: Feature strategy used for every recording
        frame_size: Samples per analysis frame
        silence_threshold: RMS above which a frame counts as voiced
        n_mfcc: Cepstral coefficients per frame (MFCC strategy)
        n_mels: Mel filterbank bands (MFCC strategy)
        latest_result: Most recent analysis result (cached)
        latest_statistics: Statistics behind the latest result
    """

    def __init__(
        self,
        strategy: Optional[Union[FeatureStrategy, str]] = None,
        frame_size: Optional[int] = None,
        silence_threshold: Optional[float] = None,
        mfcc_transform: Optional[MfccTransform] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the analyzer from configuration.

        Args:
            strategy: Feature strategy; defaults to analysis.strategy
            frame_size: Frame size; defaults to audio.frame_size
            silence_threshold: Voicing threshold; defaults to audio.silence_threshold
            mfcc_transform: Replacement spectral transform for the MFCC strategy
            logger: Logger receiving feature diagnostics
        """
        self.strategy = FeatureStrategy(strategy or config.get('analysis.strategy', 'rms_zcr'))
        self.frame_size = frame_size or config.get('audio.frame_size', 1024)
        self.silence_threshold = silence_threshold if silence_threshold is not None \
            else config.get('audio.silence_threshold', 0.008)
        self.n_mfcc = config.get('analysis.mfcc.n_mfcc', 13)
        self.n_mels = config.get('analysis.mfcc.n_mels', 26)
        self.mfcc_transform = mfcc_transform
        self.logger = logger or logging.getLogger(__name__)

        self.latest_result: Optional[StressResult] = None
        self.latest_statistics: Optional[AggregateStatistics] = None

        self.logger.info(f"AcousticStressAnalyzer initialized with strategy={self.strategy.value}, "
                         f"frame_size={self.frame_size}")

    def _extract_features(self, waveform: Waveform) -> List[FrameFeatures]:
        """Segment the waveform and extract features for every frame."""
        extractor = create_extractor(
            self.strategy,
            sample_rate=waveform.sample_rate,
            frame_size=self.frame_size,
            silence_threshold=self.silence_threshold,
            n_mfcc=self.n_mfcc,
            n_mels=self.n_mels,
            mfcc_transform=self.mfcc_transform
        )
        frames = segment_frames(waveform.samples, self.frame_size)
        features = [extractor.extract_frame(frame) for frame in frames]

        if isinstance(extractor, MfccExtractor) and extractor.failed_frames:
            self.logger.warning(f"Spectral transform gave no usable MFCC for "
                                f"{extractor.failed_frames} of {len(features)} frames")
        return features

    def _log_statistics(self, stats: AggregateStatistics) -> None:
        if self.strategy is FeatureStrategy.RMS_ZCR:
            self.logger.debug(f"Voice features: avg_rms={stats.avg_rms:.4f}, "
                              f"avg_zcr={stats.avg_zcr:.4f}, voiced_ratio={stats.voiced_ratio:.2f}")
        else:
            self.logger.debug(f"Voice features: mfcc_frames={stats.mfcc_frame_count}, "
                              f"avg_magnitude={stats.avg_magnitude:.3f}, avg_c0={stats.avg_c0:.3f}, "
                              f"mid_band_variance={stats.mid_band_variance:.4f}, "
                              f"avg_c1={stats.avg_c1:.3f}, voiced_ratio={stats.voiced_ratio:.2f}")

    def analyze(self, waveform: Waveform) -> StressResult:
        """Analyze a complete recording.

        Args:
            waveform: Decoded mono recording

        Returns:
            StressResult with emotion, stress score, confidence (voiced ratio)
            and an optional warning for degraded estimates
        """
        features = self._extract_features(waveform)
        stats = aggregate(features, self.strategy)
        self._log_statistics(stats)

        result = score(stats)

        self.latest_statistics = stats
        self.latest_result = result

        if result.warning:
            self.logger.info(f"Degraded voice estimate: {result.warning}")
        self.logger.debug(f"Acoustic analysis complete: emotion={result.emotion.value}, "
                          f"stress={result.stress_score:.3f}, confidence={result.confidence:.2f}")
        return result

    def get_latest_result(self) -> Optional[StressResult]:
        """Get the most recent analysis result from cache.

        Returns:
            Latest StressResult, or None if nothing has been analysed yet
        """
        return self.latest_result
