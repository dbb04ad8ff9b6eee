"""Synthetic test signals

Seeded generators for recordings with known acoustic character, used by the
demo script and the tests. Random jitter is confined to this module; the
analysis pipeline itself is deterministic.
"""

from typing import Optional
import numpy as np

from stress_engine.models.frames import Waveform


def silence(duration: float, sample_rate: int = 16000) -> Waveform:
    """All-zero recording"""
    return Waveform(np.zeros(int(duration * sample_rate), dtype=np.float32), sample_rate)


def tone(
    duration: float,
    frequency: float = 220.0,
    amplitude: float = 0.1,
    sample_rate: int = 16000
) -> Waveform:
    """Pure sine tone"""
    t = np.arange(int(duration * sample_rate)) / sample_rate
    samples = amplitude * np.sin(2 * np.pi * frequency * t)
    return Waveform(samples.astype(np.float32), sample_rate)


def buzz(duration: float, amplitude: float = 0.18, sample_rate: int = 16000) -> Waveform:
    """Loud square wave at the Nyquist frequency (sign flips every sample)"""
    n = int(duration * sample_rate)
    samples = amplitude * np.where(np.arange(n) % 2 == 0, 1.0, -1.0)
    return Waveform(samples.astype(np.float32), sample_rate)


def speech_like(
    duration: float,
    sample_rate: int = 16000,
    level: float = 0.08,
    pitch: float = 160.0,
    noise: float = 0.02,
    voiced_fraction: float = 0.7,
    seed: Optional[int] = 0
) -> Waveform:
    """Bursts of harmonic, noisy "syllables" separated by pauses.

    Args:
        duration: Length in seconds
        sample_rate: Sample rate in Hz
        level: Peak amplitude of voiced bursts
        pitch: Fundamental frequency of the bursts in Hz
        noise: Amplitude of broadband jitter added to bursts
        voiced_fraction: Approximate share of the recording that is voiced
        seed: Random seed for burst placement and jitter
    """
    rng = np.random.default_rng(seed)
    n = int(duration * sample_rate)
    t = np.arange(n) / sample_rate
    samples = np.zeros(n, dtype=np.float64)

    syllable = int(0.25 * sample_rate)
    for start in range(0, n, syllable):
        if rng.random() >= voiced_fraction:
            continue
        end = min(start + syllable, n)
        f0 = pitch * rng.uniform(0.9, 1.1)
        segment_t = t[start:end]
        voiced = sum(np.sin(2 * np.pi * f0 * k * segment_t) / k for k in range(1, 5))
        envelope = np.hanning(end - start)
        samples[start:end] = level * envelope * voiced + noise * rng.standard_normal(end - start)

    return Waveform(np.clip(samples, -1.0, 1.0).astype(np.float32), sample_rate)
