"""
Streamlit app wrapper for the 3D basketball court.
- Sidebar edits a copy of the default scene config
- The scene itself is rebuilt on every rerun (it is cheap and pure)
"""

import logging
from dataclasses import replace

import streamlit as st
from src.config import get_default_config
from src.logging_config import setup_logging
from src.materials import ColorPolicy
from src.viz_3d import render_court_scene

st.set_page_config(page_title="3D Basketball Court", layout="wide")

if "logging_ready" not in st.session_state:
    setup_logging(logging.INFO)
    st.session_state.logging_ready = True

defaults = get_default_config()

# ----------------------------
# Sidebar
# ----------------------------
st.sidebar.title("Scene")

policy = st.sidebar.radio(
    "Color management",
    [p.value for p in ColorPolicy],
    index=[p.value for p in ColorPolicy].index(defaults.color_policy.value),
    horizontal=True,
)
tone_mapping = st.sidebar.checkbox("ACES tone mapping", value=defaults.tone_mapping)
exposure = st.sidebar.slider("Exposure", 0.2, 3.0, defaults.exposure, step=0.1)

show_ball = st.sidebar.checkbox("Show ball", value=defaults.show_ball)
orbit = st.sidebar.checkbox("Orbit camera on start", value=defaults.orbit_enabled)
height = st.sidebar.slider("View height (px)", 480, 1080, defaults.height, step=40)

config = replace(
    defaults,
    color_policy=ColorPolicy.parse(policy),
    tone_mapping=tone_mapping,
    exposure=exposure,
    show_ball=show_ball,
    orbit_enabled=orbit,
    height=height,
)

# ----------------------------
# Page
# ----------------------------
st.title("Interactive 3D Basketball Court")
st.caption("Drag to orbit, scroll to zoom. Press **O** over the court to toggle the orbit camera.")

render_court_scene(config)
