from pathlib import Path

import streamlit as st

CSS_PATH = Path(__file__).resolve().parents[2] / "assets" / "theme.css"

MOOD_COLORS = {
    "excellent": "#DCFCE7",
    "good": "#DBEAFE",
    "neutral": "#FEF9C3",
    "poor": "#FFEDD5",
    "terrible": "#FEE2E2",
}

SCORE_COLORS = {"good": "#16A34A", "fair": "#CA8A04", "low": "#DC2626"}

def load_css():
    try:
        st.markdown(f"<style>{CSS_PATH.read_text()}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        pass

def mood_color(mood):
    return MOOD_COLORS.get((mood or "").lower(), MOOD_COLORS["neutral"])
