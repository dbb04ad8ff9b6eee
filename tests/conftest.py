"""Pytest configuration and fixtures"""

import io
import wave

import numpy as np
import pytest
from hypothesis import settings, Verbosity

# Register Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20, verbosity=Verbosity.normal)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Use CI profile by default
settings.load_profile("ci")


def encode_wav(samples: np.ndarray, sample_rate: int = 16000, channels: int = 1) -> bytes:
    """Encode float samples in [-1, 1] as 16-bit PCM WAV bytes.

    For multi-channel output, samples has shape (n, channels).
    """
    pcm = np.clip(samples, -1.0, 1.0)
    pcm = (pcm * 32767).astype('<i2')
    buffer = io.BytesIO()
    with wave.open(buffer, 'wb') as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm.tobytes())
    return buffer.getvalue()


@pytest.fixture
def make_wav():
    """Factory fixture producing WAV container bytes"""
    return encode_wav
