"""
Triangle meshes for the solid primitives (Box, Cylinder, Torus, Sphere).
Vertex layouts follow the usual scene-graph conventions: cylinders along +Y,
torus ring in the XY plane, sphere with (u, v) texture coordinates.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .primitives import Box, Cylinder, Placement, Sphere, Torus


@dataclass
class TriMesh:
    vertices: np.ndarray              # (N, 3) float
    faces: np.ndarray                 # (M, 3) int
    uv: Optional[np.ndarray] = None   # (N, 2) float, v = 0 at the top row of an image

    def bounds(self):
        return self.vertices.min(axis=0), self.vertices.max(axis=0)


def euler_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    """Rotation matrix for XYZ-ordered Euler angles (R = Rx @ Ry @ Rz)."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    Rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    Ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    Rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return Rx @ Ry @ Rz

def apply_placement(vertices: np.ndarray, placement: Placement) -> np.ndarray:
    R = euler_matrix(*placement.rotation)
    return vertices @ R.T + np.asarray(placement.position, dtype=float)


def _grid_faces(rows: int, cols: int) -> np.ndarray:
    """Two triangles per cell of a (rows+1) x (cols+1) vertex grid."""
    stride = cols + 1
    faces = []
    for i in range(rows):
        for j in range(cols):
            a = i * stride + j
            b = (i + 1) * stride + j
            c = (i + 1) * stride + j + 1
            d = i * stride + j + 1
            faces.append((a, b, d))
            faces.append((b, c, d))
    return np.asarray(faces, dtype=int)


def box_mesh(width: float, height: float, depth: float) -> TriMesh:
    hx, hy, hz = width / 2, height / 2, depth / 2
    v = np.array([
        [-hx, -hy, -hz], [hx, -hy, -hz], [hx, hy, -hz], [-hx, hy, -hz],
        [-hx, -hy,  hz], [hx, -hy,  hz], [hx, hy,  hz], [-hx, hy,  hz],
    ], dtype=float)
    f = np.array([
        [0, 2, 1], [0, 3, 2],   # back
        [4, 5, 6], [4, 6, 7],   # front
        [0, 1, 5], [0, 5, 4],   # bottom
        [3, 6, 2], [3, 7, 6],   # top
        [0, 4, 7], [0, 7, 3],   # left
        [1, 2, 6], [1, 6, 5],   # right
    ], dtype=int)
    return TriMesh(v, f)


def cylinder_mesh(top_radius: float, bottom_radius: float, height: float, radial_segments: int = 32) -> TriMesh:
    if radial_segments < 3:
        raise ValueError(f"radial_segments must be >= 3, got {radial_segments}")
    theta = np.linspace(0.0, 2 * np.pi, radial_segments, endpoint=False)
    half = height / 2
    top = np.column_stack([top_radius * np.sin(theta), np.full_like(theta, half), top_radius * np.cos(theta)])
    bot = np.column_stack([bottom_radius * np.sin(theta), np.full_like(theta, -half), bottom_radius * np.cos(theta)])
    n = radial_segments
    centers = np.array([[0.0, half, 0.0], [0.0, -half, 0.0]])
    v = np.vstack([top, bot, centers])
    top_c, bot_c = 2 * n, 2 * n + 1

    faces = []
    for k in range(n):
        k1 = (k + 1) % n
        faces.append((k, n + k, k1))
        faces.append((n + k, n + k1, k1))
        faces.append((top_c, k, k1))
        faces.append((bot_c, n + k1, n + k))
    return TriMesh(v, np.asarray(faces, dtype=int))


def torus_mesh(major_radius: float, tube_radius: float, radial_segments: int = 16, tubular_segments: int = 100) -> TriMesh:
    """Ring around the Z axis (lies in XY). Rotate pi/2 about X to lay it flat."""
    u = np.linspace(0.0, 2 * np.pi, tubular_segments + 1)   # around the ring
    v = np.linspace(0.0, 2 * np.pi, radial_segments + 1)    # around the tube
    V, U = np.meshgrid(v, u, indexing="ij")
    ring = major_radius + tube_radius * np.cos(V)
    verts = np.column_stack([
        (ring * np.cos(U)).ravel(),
        (ring * np.sin(U)).ravel(),
        (tube_radius * np.sin(V)).ravel(),
    ])
    return TriMesh(verts, _grid_faces(radial_segments, tubular_segments))


def sphere_mesh(radius: float, width_segments: int = 32, height_segments: int = 16) -> TriMesh:
    """
    UV sphere. phi sweeps around Y (u), theta from the north pole down (v).
    u, v in [0, 1]; v = 0 at the north pole, matching image row 0.
    """
    phi = np.linspace(0.0, 2 * np.pi, width_segments + 1)
    theta = np.linspace(0.0, np.pi, height_segments + 1)
    T, P = np.meshgrid(theta, phi, indexing="ij")
    verts = np.column_stack([
        (-radius * np.cos(P) * np.sin(T)).ravel(),
        (radius * np.cos(T)).ravel(),
        (radius * np.sin(P) * np.sin(T)).ravel(),
    ])
    uv = np.column_stack([
        (P / (2 * np.pi)).ravel(),
        (T / np.pi).ravel(),
    ])
    return TriMesh(verts, _grid_faces(height_segments, width_segments), uv)


def primitive_mesh(primitive) -> TriMesh:
    """Tessellate a solid primitive and move it into place."""
    if isinstance(primitive, Box):
        mesh = box_mesh(primitive.width, primitive.height, primitive.depth)
    elif isinstance(primitive, Cylinder):
        mesh = cylinder_mesh(primitive.top_radius, primitive.bottom_radius, primitive.height, primitive.radial_segments)
    elif isinstance(primitive, Torus):
        mesh = torus_mesh(primitive.major_radius, primitive.tube_radius, primitive.radial_segments, primitive.tubular_segments)
    elif isinstance(primitive, Sphere):
        mesh = sphere_mesh(primitive.radius, primitive.width_segments, primitive.height_segments)
    else:
        raise TypeError(f"No mesh for {type(primitive).__name__}")
    mesh.vertices = apply_placement(mesh.vertices, primitive.placement)
    return mesh
