"""
Scene sink: registers court primitives as Plotly traces.
- Solid primitives -> Mesh3d (tessellated in meshes.py)
- Polyline / PolylineLoop -> Scatter3d lines
- Lights, camera, background and axes go into the figure layout
"""

# --- Imports
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np
import plotly.graph_objects as go

from .config import SceneConfig, get_default_config
from .materials import Material, Shading, display_rgb, rgb_to_css, to_working_space
from .meshes import primitive_mesh
from .primitives import LINE_TYPES, MESH_TYPES, Box, PolylineLoop

logger = logging.getLogger(__name__)

LINE_WIDTH    = 3
AXIS_PADDING  = 0.5


@dataclass(frozen=True)
class SceneNodeHandle:
    index: int      # trace index in the figure
    kind: str
    name: str


# --- Helpers
def line3d(x, y, z, **kw):
    return go.Scatter3d(
        x=x, y=y, z=z, mode="lines",
        line=dict(width=kw.pop("width", LINE_WIDTH), color=kw.pop("color", "white")),
        hoverinfo="skip", showlegend=False, **kw
    )

def normalized_scene_point(point, ranges, aspect) -> dict:
    """Court-space point -> Plotly normalized scene coordinates (box spans +-aspect)."""
    out = {}
    for axis, p, (lo, hi), r in zip("xyz", point, ranges, aspect):
        half = (hi - lo) / 2 or 1.0
        out[axis] = (p - (lo + hi) / 2) / half * r
    return out


class Scene:
    """
    Retained scene over a Plotly figure. add_primitive() appends one trace per
    primitive and returns its handle; nothing is ever removed.
    """

    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config or get_default_config()
        self.fig = go.Figure()
        self.nodes: List[SceneNodeHandle] = []
        self._lo = np.full(3, np.inf)
        self._hi = np.full(3, -np.inf)

    # --- color + lighting
    def css(self, rgb) -> str:
        cfg = self.config
        return rgb_to_css(display_rgb(rgb, cfg.color_policy, cfg.exposure, cfg.tone_mapping))

    def _lighting(self, material: Material) -> dict:
        cfg = self.config
        if material.shading is Shading.BASIC:
            return dict(ambient=1.0, diffuse=0.0, specular=0.0, roughness=1.0, fresnel=0.0)
        if material.shading is Shading.PHONG:
            roughness = float(np.clip(1.0 - material.shininess / 100.0, 0.05, 1.0))
            specular = float(np.clip(material.shininess / 50.0, 0.0, 2.0))
        else:
            roughness = float(np.clip(material.roughness, 0.05, 1.0))
            specular = float(np.clip(2.0 * (1.0 - roughness), 0.0, 2.0))
        return dict(
            ambient=cfg.ambient_intensity,
            diffuse=cfg.directional_intensity,
            specular=specular,
            roughness=roughness,
            fresnel=0.2,
        )

    def _track_bounds(self, pts: np.ndarray):
        self._lo = np.minimum(self._lo, pts.min(axis=0))
        self._hi = np.maximum(self._hi, pts.max(axis=0))

    # --- registration
    def add_primitive(self, primitive, vertex_colors: Optional[np.ndarray] = None) -> SceneNodeHandle:
        material = primitive.material or Material(color=to_working_space("#ffffff", self.config.color_policy))
        kind = type(primitive).__name__

        if isinstance(primitive, LINE_TYPES):
            pts = np.asarray(primitive.points, dtype=float)
            if isinstance(primitive, PolylineLoop):
                pts = np.vstack([pts, pts[:1]])
            trace = line3d(
                pts[:, 0], pts[:, 1], pts[:, 2],
                color=self.css(material.color),
                opacity=material.opacity,
                name=primitive.name,
            )
        elif isinstance(primitive, MESH_TYPES):
            mesh = primitive_mesh(primitive)
            pts = mesh.vertices
            lx, ly, lz = self.config.directional_position
            kw = dict(color=self.css(material.color))
            if vertex_colors is not None:
                kw = dict(vertexcolor=[self.css(c) for c in vertex_colors])
            trace = go.Mesh3d(
                x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
                i=mesh.faces[:, 0], j=mesh.faces[:, 1], k=mesh.faces[:, 2],
                opacity=material.opacity if material.transparent else 1.0,
                flatshading=isinstance(primitive, Box),
                lighting=self._lighting(material),
                lightposition=dict(x=lx, y=ly, z=lz),
                hoverinfo="skip", showscale=False,
                name=primitive.name,
                meta=dict(cast_shadow=primitive.cast_shadow, receive_shadow=primitive.receive_shadow),
                **kw,
            )
        else:
            raise TypeError(f"Unsupported primitive: {kind}")

        self._track_bounds(pts)
        self.fig.add_trace(trace)
        handle = SceneNodeHandle(len(self.fig.data) - 1, kind, primitive.name)
        self.nodes.append(handle)
        return handle

    def add_all(self, primitives: Iterable) -> List[SceneNodeHandle]:
        handles = [self.add_primitive(p) for p in primitives]
        logger.debug("Registered %d primitives (%d total)", len(handles), len(self.nodes))
        return handles

    # --- layout
    def axis_ranges(self) -> List[Tuple[float, float]]:
        if not self.nodes:
            return [(-1.0, 1.0)] * 3
        return [(float(lo) - AXIS_PADDING, float(hi) + AXIS_PADDING) for lo, hi in zip(self._lo, self._hi)]

    def camera(self, ranges, aspect) -> dict:
        cfg = self.config
        return dict(
            eye=normalized_scene_point(cfg.camera_position, ranges, aspect),
            center=normalized_scene_point(cfg.camera_target, ranges, aspect),
            up=dict(x=0, y=1, z=0),
            projection=dict(type="perspective"),
        )

    def finalize(self, dragmode="orbit") -> go.Figure:
        cfg = self.config
        ranges = self.axis_ranges()
        spans = np.array([hi - lo for lo, hi in ranges])
        aspect = [float(s) for s in spans / spans.max()]
        bg = self.css(to_working_space(cfg.background_color, cfg.color_policy))
        axis = dict(visible=False, showgrid=False, zeroline=False, showbackground=False)

        self.fig.update_layout(
            showlegend=False,
            scene=dict(
                xaxis=dict(range=list(ranges[0]), **axis),
                yaxis=dict(range=list(ranges[1]), **axis),
                zaxis=dict(range=list(ranges[2]), **axis),
                camera=self.camera(ranges, aspect),
                aspectmode="manual",
                aspectratio=dict(x=aspect[0], y=aspect[1], z=aspect[2]),
                dragmode=dragmode,
                bgcolor=bg,
            ),
            paper_bgcolor=bg,
            margin=dict(l=0, r=0, t=0, b=0),
            height=cfg.height,
        )
        return self.fig


__all__ = ["SceneNodeHandle", "Scene", "line3d", "normalized_scene_point", "LINE_WIDTH"]
