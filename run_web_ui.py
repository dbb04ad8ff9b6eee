#!/usr/bin/env python3
"""Speech Stress Web UI

Streamlit front end for the voice stress pipeline: upload a voice recording,
set the facial stress input, and view the voice estimate alongside the
face + speech fusion.
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from stress_engine.main import StressEngine
from stress_engine.input.decoder import DecodeError
from stress_engine.fusion.fusion_engine import FACIAL_EMOTION_STRESS, facial_emotion_stress
from stress_engine.models.enums import FeatureStrategy, StressLevel


LEVEL_COLORS = {
    StressLevel.LOW: "green",
    StressLevel.MODERATE: "gold",
    StressLevel.HIGH: "red",
}


def stress_gauge(value: int, title: str) -> go.Figure:
    """Gauge for a 0-100 stress score with the low/moderate/high bands."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        number={'suffix': "%"},
        title={'text': title},
        gauge={
            'axis': {'range': [0, 100]},
            'bar': {'color': LEVEL_COLORS[StressLevel.from_score(value)]},
            'steps': [
                {'range': [0, 30], 'color': "#e8f5e9"},
                {'range': [30, 60], 'color': "#fffde7"},
                {'range': [60, 100], 'color': "#ffebee"},
            ],
        }
    ))
    fig.update_layout(height=260, margin=dict(l=20, r=20, t=50, b=10))
    return fig


def main():
    """Main Streamlit application."""
    st.set_page_config(
        page_title="Speech Stress Analysis",
        page_icon="🎙️",
        layout="wide"
    )

    st.title("🎙️ Speech Stress Analysis")
    st.markdown("Acoustic analysis of a short voice recording, fused with facial stress")
    st.markdown("---")

    if 'history' not in st.session_state:
        st.session_state.history = []

    with st.sidebar:
        st.header("Settings")
        strategy = st.radio(
            "Feature strategy",
            [s.value for s in FeatureStrategy],
            format_func=lambda v: "RMS energy + zero-crossing rate" if v == "rms_zcr" else "MFCC"
        )

        st.markdown("---")
        st.subheader("Facial input")
        use_emotion = st.checkbox("Use detected facial emotion", value=True)
        if use_emotion:
            emotion = st.selectbox("Facial emotion", sorted(FACIAL_EMOTION_STRESS))
            face_score = facial_emotion_stress(emotion)
            st.caption(f"Facial stress: {face_score}%")
        else:
            face_score = st.slider("Facial stress score", 0, 100, 30)

    uploaded = st.file_uploader(
        "Upload 8-10 seconds of speech",
        type=["webm", "ogg", "wav", "mp3", "m4a", "flac"]
    )

    if uploaded is None:
        st.info("👆 Upload a voice recording to analyse it")
        st.markdown("### How it works")
        st.markdown("""
        1. The recording is decoded to mono PCM and split into 1024-sample frames
        2. Each frame yields RMS energy and zero-crossing rate, or 13 MFCCs
        3. Frame statistics map to a vocal emotion and a stress score
        4. The voice score is fused with facial stress: **0.6 × face + 0.4 × voice**
        """)
        return

    engine = StressEngine(strategy=strategy, face_score=face_score)
    try:
        with st.spinner("Analysing voice..."):
            reading = engine.analyze_bytes(uploaded.getvalue())
    except DecodeError as e:
        st.error(f"Analysis failed: {e}")
        return

    result = reading.stress_result
    fusion = reading.fusion

    if result.warning:
        st.warning(result.warning)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Voice State", result.emotion.value.title())
    with col2:
        st.metric("Speech Detected", f"{result.confidence:.0%}")
    with col3:
        st.metric("Fusion Level", fusion.level.label)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.plotly_chart(stress_gauge(result.speech_score, "Voice Stress"), use_container_width=True)
    with col2:
        st.plotly_chart(stress_gauge(round(face_score), "Face Stress"), use_container_width=True)
    with col3:
        st.plotly_chart(stress_gauge(fusion.score, "Multimodal Fusion"), use_container_width=True)
    st.caption("Fusion = 0.6 × face + 0.4 × voice")

    with st.expander("Reading details"):
        st.json(reading.to_dict())

    reading_key = (uploaded.name, uploaded.size, strategy, face_score)
    if st.session_state.get('last_reading_key') != reading_key:
        st.session_state.last_reading_key = reading_key
        st.session_state.history.append({
            'reading': len(st.session_state.history) + 1,
            'voice': result.speech_score,
            'face': face_score,
            'fusion': fusion.score,
        })

    if len(st.session_state.history) > 1:
        st.markdown("---")
        st.subheader("Reading History")
        df = pd.DataFrame(st.session_state.history)
        st.line_chart(df.set_index('reading')[['voice', 'face', 'fusion']])


if __name__ == "__main__":
    main()
