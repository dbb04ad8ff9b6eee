"""Audio container decoding into mono PCM waveforms"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

import av
import numpy as np

from stress_engine.models.frames import Waveform
from stress_engine.config.config_loader import config


logger = logging.getLogger(__name__)


AudioSource = Union[str, Path, bytes, bytearray, BinaryIO]


class DecodeError(Exception):
    """Exception raised when a recording cannot be decoded"""
    pass


class AudioDecoder:
    """Decodes compressed or raw audio containers (webm/opus, ogg, wav, mp3, ...).

    The first audio stream is downmixed to mono float32 with PyAV's resampler.
    The native sample rate is kept unless a target rate is configured.

    Attributes:
        target_sample_rate: Output rate in Hz, or None to keep the native rate
    """

    def __init__(self, target_sample_rate: Optional[int] = None):
        self.target_sample_rate = target_sample_rate or config.get('decoder.target_sample_rate')

    def _open(self, source: AudioSource):
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        elif isinstance(source, Path):
            source = str(source)

        try:
            return av.open(source, mode='r')
        except (av.error.FFmpegError, OSError, ValueError) as e:
            raise DecodeError(f"Unable to open audio container: {e}") from e

    def decode(self, source: AudioSource) -> Waveform:
        """Decode an audio container into a mono waveform.

        Args:
            source: File path, raw container bytes, or a binary file object

        Returns:
            Waveform with float32 samples and the output sample rate

        Raises:
            DecodeError: If the container is malformed, unsupported, or has
                         no audio stream
        """
        container = self._open(source)
        with container:
            if not container.streams.audio:
                raise DecodeError("Recording contains no audio stream")

            stream = container.streams.audio[0]
            resampler = av.AudioResampler(format='flt', layout='mono', rate=self.target_sample_rate)
            chunks = []

            try:
                for frame in container.decode(stream):
                    for resampled in resampler.resample(frame):
                        chunks.append(resampled.to_ndarray().reshape(-1))
                for resampled in resampler.resample(None):
                    chunks.append(resampled.to_ndarray().reshape(-1))
            except (av.error.FFmpegError, ValueError) as e:
                raise DecodeError(f"Failed to decode audio stream: {e}") from e

            sample_rate = self.target_sample_rate or stream.codec_context.sample_rate
            codec = stream.codec_context.name

        if not sample_rate:
            raise DecodeError("Audio stream reports no sample rate")

        samples = np.concatenate(chunks) if chunks else np.zeros(0, dtype=np.float32)
        logger.info(f"Decoded {len(samples)} samples at {sample_rate} Hz ({codec})")

        return Waveform(samples=samples.astype(np.float32), sample_rate=int(sample_rate))
