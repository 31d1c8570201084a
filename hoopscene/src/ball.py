"""
Textured basketball: sphere primitive + PBR-style material from three maps.
- Base color map sampled per vertex (u, v from the sphere parametrization)
- Normal map folded into the vertex shade as a bump/seam factor
- Roughness map averaged into the material roughness
Any map that fails to load is skipped; the ball keeps its default material.
"""

import logging
from concurrent.futures import Future
from typing import Dict, Optional

import numpy as np

from .config import SceneConfig
from .materials import ColorPolicy, Material, Shading, make_material, srgb_to_linear
from .meshes import TriMesh
from .primitives import Placement, Sphere
from .textures import ColorSpace, Texture, TextureLoader

logger = logging.getLogger(__name__)

TEXTURE_SPACES = {
    "base_color": ColorSpace.SRGB,
    "normal": ColorSpace.LINEAR,
    "roughness": ColorSpace.LINEAR,
}


def build_ball(config: SceneConfig, material: Optional[Material] = None) -> Sphere:
    material = material or ball_material({}, config)
    return Sphere(
        config.ball_radius, config.ball_segments, config.ball_segments,
        placement=Placement(config.ball_position),
        material=material,
        name="ball",
        cast_shadow=config.shadows,
    )


def request_ball_textures(loader: TextureLoader, config: SceneConfig, **callbacks) -> Dict[str, Future]:
    """Kick off all three map loads; returns immediately."""
    return {
        key: loader.load(path, color_space=TEXTURE_SPACES[key], **callbacks)
        for key, path in config.texture_paths.items()
    }


def resolve_ball_textures(futures: Dict[str, Future]) -> Dict[str, Optional[Texture]]:
    textures = {key: fut.result() for key, fut in futures.items()}
    missing = sorted(key for key, tex in textures.items() if tex is None)
    if missing:
        logger.warning("Ball maps unavailable (%s); default material used for them", ", ".join(missing))
    return textures


def ball_material(textures: Dict[str, Optional[Texture]], config: SceneConfig) -> Material:
    roughness = 1.0
    rough_map = textures.get("roughness")
    if rough_map is not None:
        # roughness lives in the green channel of packed maps; grayscale maps have r = g = b
        roughness = float(np.clip(rough_map.pixels[..., 1].mean(), 0.0, 1.0))
    return make_material(
        config.ball_fallback_color, config.color_policy, Shading.STANDARD,
        metalness=config.ball_metalness, roughness=roughness,
    )


def ball_vertex_colors(mesh: TriMesh, textures: Dict[str, Optional[Texture]], config: SceneConfig) -> Optional[np.ndarray]:
    """
    (N, 3) working-space colors for the ball vertices, or None without a base color map.
    """
    base = textures.get("base_color")
    if base is None or mesh.uv is None:
        return None

    colors = base.sample(mesh.uv)
    if base.color_space is ColorSpace.SRGB and config.color_policy is ColorPolicy.LINEARIZED:
        colors = srgb_to_linear(colors)

    normal = textures.get("normal")
    if normal is not None:
        n = normal.sample(mesh.uv) * 2.0 - 1.0
        shade = np.clip(n[:, 2], 0.0, 1.0)
        colors = colors * shade[:, None]

    return colors
