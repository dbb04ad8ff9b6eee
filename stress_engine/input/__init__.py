"""Audio input: microphone capture, container decoding and synthetic signals"""

from stress_engine.input.decoder import AudioDecoder, DecodeError
from stress_engine.input.recorder import MicrophoneRecorder, CaptureError, RecordingInProgressError

__all__ = [
    'AudioDecoder',
    'DecodeError',
    'MicrophoneRecorder',
    'CaptureError',
    'RecordingInProgressError',
]
