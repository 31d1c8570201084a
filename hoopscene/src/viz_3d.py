"""
3D visualization utilities for the basketball court app.
- Assembles the court layout, hoops and ball into one Plotly figure
- Renders it in Streamlit with the orbit toggle + instructions overlay
"""
import logging
from concurrent.futures import Future
from typing import Dict, Optional, Union

import streamlit as st
import plotly.graph_objects as go

from .ball import (
    ball_material,
    ball_vertex_colors,
    build_ball,
    request_ball_textures,
    resolve_ball_textures,
)
from .config import SceneConfig, get_default_config
from .controls import OrbitControls, scene_page_html
from .court_geometry import build_court_layout
from .materials import court_palette
from .meshes import primitive_mesh
from .scene import Scene
from .textures import Texture, TextureLoader

logger = logging.getLogger(__name__)

FIGURE_DIV_ID = "court-scene"

TextureSource = Union[Texture, Future, None]


def _ready(textures: Dict[str, TextureSource]) -> Dict[str, Optional[Texture]]:
    pending = {key: tex for key, tex in textures.items() if isinstance(tex, Future)}
    if not pending:
        return textures
    return {**textures, **resolve_ball_textures(pending)}


def build_scene_figure(
    config: Optional[SceneConfig] = None,
    textures: Optional[Dict[str, TextureSource]] = None,
    controls: Optional[OrbitControls] = None,
) -> go.Figure:
    """
    Court + hoops (+ ball) as a finished Plotly figure.

    `textures` maps base_color/normal/roughness to loaded maps or to pending
    futures from request_ball_textures(). Futures are only waited on once the
    court primitives are registered. None entries are fine; without any maps
    the ball uses its default material.
    """
    config = config or get_default_config()
    controls = controls or OrbitControls(enabled=config.orbit_enabled, toggle_key=config.orbit_key)
    textures = textures or {}

    scene = Scene(config)
    layout = build_court_layout(court_palette(config.color_policy))
    scene.add_all(layout.primitives())

    if config.show_ball:
        maps = _ready(textures)
        ball = build_ball(config, ball_material(maps, config))
        colors = ball_vertex_colors(primitive_mesh(ball), maps, config)
        scene.add_primitive(ball, vertex_colors=colors)

    logger.info("Scene assembled: %d nodes (%s colors)", len(scene.nodes), config.color_policy.value)
    return scene.finalize(dragmode=controls.dragmode)


def load_ball_textures(config: SceneConfig) -> Dict[str, Optional[Texture]]:
    with TextureLoader() as loader:
        futures = request_ball_textures(loader, config)
        return resolve_ball_textures(futures)


@st.cache_resource(show_spinner=False)
def _shared_texture_loader() -> TextureLoader:
    # lives across reruns; keeps successful reads only
    return TextureLoader(cache=True)


def render_court_scene(config: Optional[SceneConfig] = None):
    config = config or get_default_config()
    controls = OrbitControls(enabled=config.orbit_enabled, toggle_key=config.orbit_key)

    futures = {}
    if config.show_ball:
        futures = request_ball_textures(_shared_texture_loader(), config)

    fig = build_scene_figure(config, futures, controls)

    missing = [k for k, fut in futures.items() if fut.result() is None]
    if missing:
        st.warning(f"Ball textures missing ({', '.join(missing)}); using the default material.")

    figure_html = fig.to_html(
        include_plotlyjs="cdn",
        full_html=False,
        div_id=FIGURE_DIV_ID,
        config=dict(displaylogo=False, scrollZoom=True),
    )
    background = fig.layout.paper_bgcolor or "black"
    st.iframe(
        scene_page_html(figure_html, controls, FIGURE_DIV_ID, background=background),
        height=config.height + 10,
    )
