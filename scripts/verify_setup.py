#!/usr/bin/env python3
"""Check that this machine can produce a voice stress reading.

Each check exercises one stage of the pipeline the way the application uses
it and returns a short description of what it saw. A check that raises fails.
The microphone is optional: file analysis works without one.
"""

import io
import sys
import wave
from pathlib import Path

import numpy as np

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def check_config() -> str:
    from stress_engine.config.config_loader import config

    config.validate()
    return (f"{config.config_path} (strategy {config.get('analysis.strategy')}, "
            f"frame size {config.get('audio.frame_size')})")


def check_decoder() -> str:
    """Decode a short in-memory WAV through PyAV."""
    from stress_engine.input.decoder import AudioDecoder

    buffer = io.BytesIO()
    with wave.open(buffer, 'wb') as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(16000)
        wav.writeframes(np.zeros(16000, dtype='<i2').tobytes())

    waveform = AudioDecoder().decode(buffer.getvalue())
    return f"decoded {waveform.duration:.2f}s at {waveform.sample_rate} Hz"


def check_pipeline() -> str:
    """Score one second of buzz with every feature strategy and fuse it."""
    from stress_engine.main import StressEngine
    from stress_engine.input import synthetic
    from stress_engine.models.enums import FeatureStrategy

    readings = []
    for strategy in FeatureStrategy:
        reading = StressEngine(strategy=strategy).analyze_waveform(synthetic.buzz(1.0))
        readings.append(f"{strategy.value} {reading.stress_result.speech_score}% "
                        f"-> fusion {reading.fusion.score}%")
    return ", ".join(readings)


def check_microphone() -> str:
    from stress_engine.input.recorder import CaptureError

    try:
        import sounddevice as sd
    except (ImportError, OSError) as e:
        raise CaptureError(f"sounddevice unavailable: {e}") from e
    return f"default input {sd.query_devices(kind='input')['name']}"


CHECKS = [
    ("Configuration", check_config, True),
    ("Decoder", check_decoder, True),
    ("Pipeline", check_pipeline, True),
    ("Microphone", check_microphone, False),
]


def run_checks(checks=CHECKS) -> bool:
    """Run checks in order, printing one line each.

    Returns:
        False if any required check failed
    """
    ok = True
    for name, check, required in checks:
        try:
            print(f"  ✓ {name}: {check()}")
        except Exception as e:
            marker = "✗" if required else "-"
            print(f"  {marker} {name}: {e}")
            ok = ok and not required
    return ok


def main():
    print("Voice stress setup check")
    if run_checks():
        print("\nReady. Try: python demo_simple.py, or streamlit run run_web_ui.py")
        return 0
    print("\nSetup incomplete, see the failures above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
