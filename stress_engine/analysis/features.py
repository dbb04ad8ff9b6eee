"""Acoustic Feature Extraction

Per-frame feature extractors for voice stress analysis. Two interchangeable
strategies are provided behind the FeatureExtractor interface:

    - RMS/ZCR: root-mean-square energy and zero-crossing rate
    - MFCC: 13 mel-frequency cepstral coefficients from a 26-band filterbank

Both tag each frame voiced/unvoiced with the same RMS silence threshold on the
raw samples. The strategy is chosen once, when the extractor is created.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np
import librosa

from stress_engine.models.enums import FeatureStrategy
from stress_engine.models.features import RmsZcrFeatures, MfccFeatures
from stress_engine.models.interfaces import FeatureExtractor


logger = logging.getLogger(__name__)


DEFAULT_SILENCE_THRESHOLD = 0.008
DEFAULT_N_MFCC = 13
DEFAULT_N_MELS = 26


def frame_rms(frame: np.ndarray) -> float:
    """Root-mean-square energy of a frame"""
    if len(frame) == 0:
        return 0.0
    frame = frame.astype(np.float64)
    return float(np.sqrt(np.mean(frame * frame)))


def zero_crossing_rate(frame: np.ndarray) -> float:
    """Adjacent-sample sign changes divided by the frame length.

    A sample is treated as positive when it is >= 0, so a run of zeros does
    not count as crossings.
    """
    if len(frame) == 0:
        return 0.0
    positive = frame >= 0
    crossings = np.count_nonzero(positive[1:] != positive[:-1])
    return crossings / len(frame)


def is_voiced(rms: float, silence_threshold: float = DEFAULT_SILENCE_THRESHOLD) -> bool:
    return rms > silence_threshold


class RmsZcrExtractor(FeatureExtractor):
    """Energy and zero-crossing features per frame"""

    strategy = FeatureStrategy.RMS_ZCR

    def __init__(self, silence_threshold: float = DEFAULT_SILENCE_THRESHOLD):
        self.silence_threshold = silence_threshold

    def extract_frame(self, frame: np.ndarray) -> RmsZcrFeatures:
        rms = frame_rms(frame)
        return RmsZcrFeatures(
            rms=rms,
            zcr=zero_crossing_rate(frame),
            voiced=is_voiced(rms, self.silence_threshold)
        )


@dataclass(frozen=True)
class MfccConfig:
    """Immutable parameters for one MFCC extraction run

    Attributes:
        sample_rate: Sample rate of the recording in Hz
        frame_size: Samples per frame (also the FFT size)
        n_mfcc: Number of cepstral coefficients per frame
        n_mels: Number of mel filterbank bands
        silence_threshold: RMS above which a frame counts as voiced
    """
    sample_rate: int
    frame_size: int = 1024
    n_mfcc: int = DEFAULT_N_MFCC
    n_mels: int = DEFAULT_N_MELS
    silence_threshold: float = DEFAULT_SILENCE_THRESHOLD

    def __post_init__(self):
        assert self.sample_rate > 0, "Sample rate must be positive"
        assert self.frame_size > 0, "Frame size must be positive"
        assert self.n_mfcc > 0, "Coefficient count must be positive"
        assert self.n_mels >= self.n_mfcc, "Mel bands must cover the coefficient count"


MfccTransform = Callable[[np.ndarray, MfccConfig], np.ndarray]


def librosa_mfcc(frame: np.ndarray, mfcc_config: MfccConfig) -> np.ndarray:
    """Compute the MFCC vector of exactly one frame with librosa.

    Hann window, power spectrum, mel filterbank, log (dB) and DCT-II, with the
    FFT and hop both equal to the frame size so that a single column results.
    """
    coefficients = librosa.feature.mfcc(
        y=np.ascontiguousarray(frame, dtype=np.float32),
        sr=mfcc_config.sample_rate,
        n_mfcc=mfcc_config.n_mfcc,
        n_fft=mfcc_config.frame_size,
        hop_length=mfcc_config.frame_size,
        n_mels=mfcc_config.n_mels,
        window='hann',
        center=False
    )
    return coefficients[:, 0]


class MfccExtractor(FeatureExtractor):
    """Mel-frequency cepstral features per frame

    Unvoiced frames skip the spectral transform entirely. If the transform
    raises or returns a vector of the wrong size, the frame keeps its voicing
    but carries no MFCC vector, so it is excluded from aggregation.

    Attributes:
        mfcc_config: Parameters passed to every transform call
        transform: Callable computing one frame's coefficients
        failed_frames: Voiced frames whose transform produced no usable vector
    """

    strategy = FeatureStrategy.MFCC

    def __init__(self, mfcc_config: MfccConfig, transform: Optional[MfccTransform] = None):
        self.mfcc_config = mfcc_config
        self.transform = transform or librosa_mfcc
        self.failed_frames = 0

    def _compute_mfcc(self, frame: np.ndarray) -> Optional[np.ndarray]:
        try:
            coefficients = np.asarray(self.transform(frame, self.mfcc_config), dtype=np.float64)
        except Exception as e:
            logger.debug(f"MFCC transform failed: {e}")
            return None

        coefficients = coefficients.reshape(-1)
        if coefficients.size != self.mfcc_config.n_mfcc:
            logger.debug(f"MFCC transform returned {coefficients.size} coefficients, "
                         f"expected {self.mfcc_config.n_mfcc}")
            return None
        if not np.all(np.isfinite(coefficients)):
            logger.debug("MFCC transform returned non-finite coefficients")
            return None
        return coefficients

    def extract_frame(self, frame: np.ndarray) -> MfccFeatures:
        rms = frame_rms(frame)
        voiced = is_voiced(rms, self.mfcc_config.silence_threshold)
        if not voiced:
            return MfccFeatures(rms=rms, voiced=False)

        coefficients = self._compute_mfcc(frame)
        if coefficients is None:
            self.failed_frames += 1
        return MfccFeatures(rms=rms, voiced=True, mfcc=coefficients)


def create_extractor(
    strategy: FeatureStrategy,
    sample_rate: int,
    frame_size: int = 1024,
    silence_threshold: float = DEFAULT_SILENCE_THRESHOLD,
    n_mfcc: int = DEFAULT_N_MFCC,
    n_mels: int = DEFAULT_N_MELS,
    mfcc_transform: Optional[MfccTransform] = None
) -> FeatureExtractor:
    """Build the extractor for a strategy.

    A new extractor is created per recording, since MFCC parameters depend on
    the recording's sample rate.
    """
    if strategy is FeatureStrategy.RMS_ZCR:
        return RmsZcrExtractor(silence_threshold=silence_threshold)
    if strategy is FeatureStrategy.MFCC:
        mfcc_config = MfccConfig(
            sample_rate=sample_rate,
            frame_size=frame_size,
            n_mfcc=n_mfcc,
            n_mels=n_mels,
            silence_threshold=silence_threshold
        )
        return MfccExtractor(mfcc_config, transform=mfcc_transform)
    raise ValueError(f"Unsupported feature strategy: {strategy}")
