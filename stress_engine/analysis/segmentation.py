"""Frame segmentation for offline recording analysis"""

import numpy as np


DEFAULT_FRAME_SIZE = 1024


def segment_frames(samples: np.ndarray, frame_size: int = DEFAULT_FRAME_SIZE) -> np.ndarray:
    """Slice a mono waveform into fixed-size, non-overlapping frames.

    The frames partition the waveform from the first sample onward; a trailing
    partial frame is dropped rather than padded.

    Args:
        samples: 1-D array of PCM samples
        frame_size: Samples per frame

    Returns:
        Array of shape (floor(N / frame_size), frame_size). Empty input yields
        an array with zero rows.

    Raises:
        ValueError: If frame_size is not positive
    """
    if frame_size <= 0:
        raise ValueError(f"frame_size must be positive, got {frame_size}")

    samples = np.asarray(samples).reshape(-1)
    frame_count = len(samples) // frame_size
    return samples[:frame_count * frame_size].reshape(frame_count, frame_size)
