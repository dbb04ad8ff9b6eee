"""Data model for decoded audio"""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True, eq=False)
class Waveform:
    """A decoded mono PCM recording

    Attributes:
        samples: Float samples in [-1.0, 1.0] as a read-only 1-D numpy array
        sample_rate: Sample rate in Hz (e.g., 16000)
    """
    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        """Validate and freeze the sample buffer.

        The samples are copied to float32 and marked read-only so that a
        waveform cannot change after decoding.

        Raises:
            AssertionError: If any validation check fails
        """
        assert isinstance(self.samples, np.ndarray), "Samples must be numpy array"
        assert self.samples.ndim == 1, "Samples must be a 1-D (mono) array"
        assert self.sample_rate > 0, "Sample rate must be positive"

        samples = np.array(self.samples, dtype=np.float32, copy=True)
        samples.setflags(write=False)
        object.__setattr__(self, 'samples', samples)

    @property
    def duration(self) -> float:
        """Length of the recording in seconds"""
        return len(self.samples) / self.sample_rate

    def __len__(self) -> int:
        return len(self.samples)
