"""Microphone capture for voice stress recordings

Records a fixed-length mono buffer from the default input device. Capture is
I/O bound and awaits either the auto-stop timeout or an explicit stop(); all
analysis happens afterwards on the complete buffer.
"""

import asyncio
import logging
from typing import Callable, List, Optional
import numpy as np

from stress_engine.models.frames import Waveform
from stress_engine.config.config_loader import config


logger = logging.getLogger(__name__)


class CaptureError(Exception):
    """Exception raised when the microphone cannot be opened or read"""
    pass


class RecordingInProgressError(CaptureError):
    """Exception raised when a recording is started while another is active"""
    pass


def sounddevice_stream(sample_rate: int, blocksize: int, callback: Callable):
    """Open a mono float32 input stream on the default device.

    sounddevice loads the PortAudio library on import, so it is imported here
    rather than at module load. A missing library is a capture failure.
    """
    try:
        import sounddevice as sd
    except (ImportError, OSError) as e:
        raise CaptureError(f"Audio capture backend unavailable: {e}") from e

    return sd.InputStream(
        samplerate=sample_rate,
        blocksize=blocksize,
        channels=1,
        dtype='float32',
        callback=callback
    )


class MicrophoneRecorder:
    """Single-session microphone recorder.

    Only one recording may be active at a time; the is_recording flag guards
    against overlapping sessions.

    Attributes:
        sample_rate: Capture rate in Hz
        blocksize: Samples delivered per stream callback
        duration: Default auto-stop duration in seconds
        is_recording: Whether a recording is in progress
    """

    def __init__(
        self,
        sample_rate: Optional[int] = None,
        duration: Optional[float] = None,
        blocksize: Optional[int] = None,
        stream_factory: Callable = sounddevice_stream
    ):
        self.sample_rate = sample_rate or config.get('audio.sample_rate', 16000)
        self.blocksize = blocksize or config.get('recording.blocksize', 1024)
        self.duration = duration or config.get('recording.duration.rms_zcr', 10.0)
        self.stream_factory = stream_factory

        self.is_recording = False
        self._stop_event: Optional[asyncio.Event] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    async def record(self, duration: Optional[float] = None) -> Waveform:
        """Capture audio until the duration elapses or stop() is called.

        Args:
            duration: Auto-stop duration in seconds; defaults to self.duration

        Returns:
            Waveform of everything captured, possibly truncated by stop()

        Raises:
            RecordingInProgressError: If another recording is active
            CaptureError: If the input device cannot be opened or started
        """
        if self.is_recording:
            raise RecordingInProgressError("A recording is already in progress")

        duration = duration or self.duration
        chunks: List[np.ndarray] = []

        def callback(indata, frames, time_info, status):
            if status:
                logger.debug(f"Input stream status: {status}")
            chunks.append(indata.copy().astype(np.float32).reshape(-1))

        self.is_recording = True
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        stream = None
        try:
            try:
                stream = self.stream_factory(self.sample_rate, self.blocksize, callback)
                stream.start()
            except CaptureError:
                raise
            except Exception as e:
                logger.error(f"Microphone unavailable: {e}")
                if stream is not None:
                    stream.close()
                raise CaptureError(f"Microphone access denied or unavailable: {e}") from e

            logger.info(f"Recording started ({duration:.0f}s max)")
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=duration)
                logger.info("Recording stopped early")
            except asyncio.TimeoutError:
                logger.info("Recording auto-stopped")
            finally:
                stream.stop()
                stream.close()
        finally:
            self.is_recording = False
            self._stop_event = None

        samples = np.concatenate(chunks) if chunks else np.zeros(0, dtype=np.float32)
        logger.debug(f"Captured {len(samples)} samples")
        return Waveform(samples=samples, sample_rate=self.sample_rate)

    def stop(self) -> None:
        """Stop the active recording early; a no-op when idle.

        Safe to call from any thread.
        """
        if self._stop_event is None or self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._stop_event.set)
