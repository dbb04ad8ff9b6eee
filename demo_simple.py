#!/usr/bin/env python3
"""Simple demo of the voice stress pipeline without Streamlit.

Runs both feature strategies over synthetic recordings with known acoustic
character and fuses each estimate with a fixed facial stress score.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from stress_engine.analysis.acoustic import AcousticStressAnalyzer
from stress_engine.fusion.fusion_engine import FusionEngine
from stress_engine.input import synthetic
from stress_engine.models.enums import FeatureStrategy


FACE_SCORE = 30

RECORDINGS = [
    ("Silence", lambda duration: synthetic.silence(duration)),
    ("Quiet low tone", lambda duration: synthetic.tone(duration, frequency=120.0, amplitude=0.02)),
    ("Speech-like bursts", lambda duration: synthetic.speech_like(duration, seed=7)),
    ("Loud buzz", lambda duration: synthetic.buzz(duration)),
]

DURATIONS = {
    FeatureStrategy.RMS_ZCR: 10.0,
    FeatureStrategy.MFCC: 8.0,
}


def demo_pipeline():
    """Demonstrate the voice stress pipeline with synthetic recordings."""

    print("=" * 60)
    print("Voice Stress Pipeline Demo")
    print("=" * 60)
    print()

    for strategy in FeatureStrategy:
        analyzer = AcousticStressAnalyzer(strategy=strategy)
        fusion_engine = FusionEngine(face_score=FACE_SCORE)
        duration = DURATIONS[strategy]

        print(f"Strategy: {strategy.value} ({duration:.0f}s recordings, face score {FACE_SCORE})")
        print("-" * 60)

        for name, make_recording in RECORDINGS:
            result = analyzer.analyze(make_recording(duration))
            fusion_engine.update_speech_result(result)
            fusion = fusion_engine.get_latest_score()

            print(f"  {name}:")
            print(f"    → Voice: {result.emotion.value}, stress {result.speech_score}%, "
                  f"speech detected {result.confidence:.0%}")
            if result.warning:
                print(f"    → Warning: {result.warning}")
            print(f"    → Fusion: {fusion.score}% ({fusion.level.label})")

        print()

    print("=" * 60)
    print("Fusion = 0.6 × face + 0.4 × voice")
    print("=" * 60)


if __name__ == "__main__":
    try:
        demo_pipeline()
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()
