"""
Court geometry for the full 3D basketball court.
Pure builders: each returns primitives, nothing touches the scene.
"""

# --- Imports
import logging
import math
from typing import List, Optional

import numpy as np

from .materials import CourtPalette, court_palette
from .primitives import (
    Arc, Box, CourtLayout, Cylinder, Placement, Polyline, PolylineLoop,
    Primitive, Torus, anchor_points, segment,
)

logger = logging.getLogger(__name__)

# --- Court constants (meters), 30 x 15 keeps the 2:1 ratio
COURT_LENGTH      = 30.0
COURT_WIDTH       = 15.0
COURT_THICKNESS   = 0.2
HALF_LENGTH       = COURT_LENGTH / 2     # baseline x, also the hoop x-offset

# lines sit above the slab top (y = 0.1) so they never z-fight with it
CENTER_LINE_Y     = 0.11
THREE_PT_Y        = 0.201

CENTER_CIRCLE_RADIUS   = 1.8
CENTER_CIRCLE_SEGMENTS = 64

THREE_PT_RADIUS   = 6.75
THREE_PT_SIDE     = 4.7              # z of the straight side lines
THREE_PT_SEGMENTS = 64

RIM_HEIGHT        = 3.05             # 10 ft
BACKBOARD_WIDTH   = 1.8
BACKBOARD_HEIGHT  = 1.05
BACKBOARD_THICKNESS = 0.05
RIM_RADIUS        = 0.45
RIM_THICKNESS     = 0.05
RIM_DROP          = 0.15             # rim sits this far below the backboard center
RIM_RADIAL_SEGMENTS   = 16
RIM_TUBULAR_SEGMENTS  = 100
NET_LENGTH        = 0.5
NET_SEGMENTS      = 8

POLE_RADIUS       = 0.1
POLE_HEIGHT       = 4.0
ARM_RISE          = 0.5              # arm starts this far above rim height

# Hand-tuned placement constants. They reproduce the observed hoop layout and
# are not derived from the backboard/rim dimensions; keep them as they are.
ARM_LENGTH        = 0.4              # 1/3 of the earlier arm length
RIM_OFFSET        = BACKBOARD_THICKNESS / 2 + RIM_THICKNESS / 2 + 0.02
RIM_OFFSET_SCALE  = 7


# --- Helpers
def side_direction(x_offset: float) -> float:
    """-1 for the right basket (x > 0), +1 for the left one: points toward center court."""
    return -1.0 * float(np.sign(x_offset))

def three_point_angle(radius: float = THREE_PT_RADIUS, side: float = THREE_PT_SIDE) -> float:
    return math.acos(side / radius)

def circle_points(radius: float, y: float, n: int = CENTER_CIRCLE_SEGMENTS, xc: float = 0.0, zc: float = 0.0):
    """n points on a circle, theta in [0, 2pi), no repeated closing point."""
    arc = Arc(xc, zc, radius, 0.0, 2 * math.pi, clockwise=False, samples=n)
    return tuple(arc.points(y, endpoint=False))


# --- Builders
def build_court_slab(palette: Optional[CourtPalette] = None) -> Box:
    palette = palette or court_palette()
    return Box(
        COURT_LENGTH, COURT_THICKNESS, COURT_WIDTH,
        placement=Placement((0.0, 0.0, 0.0)),
        material=palette.court,
        name="court",
        receive_shadow=True,
    )


def build_center_markings(palette: Optional[CourtPalette] = None) -> List[Primitive]:
    palette = palette or court_palette()
    half_w = COURT_WIDTH / 2
    center_line = segment(
        (0.0, CENTER_LINE_Y, -half_w), (0.0, CENTER_LINE_Y, half_w),
        material=palette.line, name="center_line",
    )
    center_circle = PolylineLoop(
        points=circle_points(CENTER_CIRCLE_RADIUS, CENTER_LINE_Y),
        material=palette.line,
        name="center_circle",
    )
    return [center_line, center_circle]


def build_three_point_line(x_offset: float, palette: Optional[CourtPalette] = None) -> List[Primitive]:
    """
    Three-point line for the basket at `x_offset`: arc + 2 straight side lines.

    The arc is centered at (-x_offset, 0) and always bulges toward center
    court. The side lines run from the baseline at x_offset to
    arcX = x_offset + direction * R * cos(angle) at z = +-THREE_PT_SIDE,
    where angle = acos(THREE_PT_SIDE / R).
    """
    palette = palette or court_palette()
    R = THREE_PT_RADIUS
    direction = side_direction(x_offset)
    angle = three_point_angle(R, THREE_PT_SIDE)

    if direction < 0:
        start, end = -angle, angle
    else:
        start, end = math.pi - angle, math.pi + angle
    arc = Arc(-x_offset, 0.0, R, start, end, clockwise=False, samples=THREE_PT_SEGMENTS)
    arc_line = Polyline(points=tuple(arc.points(THREE_PT_Y)), material=palette.line, name="three_point_arc")

    arc_x = x_offset + direction * R * math.cos(angle)
    y = THREE_PT_Y
    left = segment((x_offset, y, -THREE_PT_SIDE), (arc_x, y, -THREE_PT_SIDE), palette.line, "three_point_side")
    right = segment((arc_x, y, THREE_PT_SIDE), (x_offset, y, THREE_PT_SIDE), palette.line, "three_point_side")
    return [arc_line, left, right]


def rim_center(x_offset: float):
    direction = side_direction(x_offset)
    arm_end_x = x_offset + direction * ARM_LENGTH
    return (arm_end_x + direction * RIM_OFFSET * RIM_OFFSET_SCALE, RIM_HEIGHT - RIM_DROP, 0.0)


def build_net(rim_pos, palette: Optional[CourtPalette] = None) -> List[Polyline]:
    palette = palette or court_palette()
    rx, ry, rz = rim_pos
    net = []
    for i in range(NET_SEGMENTS):
        angle = (i / NET_SEGMENTS) * math.pi * 2
        x1 = rx + math.cos(angle) * RIM_RADIUS
        z1 = rz + math.sin(angle) * RIM_RADIUS
        net.append(segment((x1, ry, z1), (x1, ry - NET_LENGTH, z1), palette.net, "net"))
    return net


def build_hoop(x_offset: float, palette: Optional[CourtPalette] = None) -> List[Primitive]:
    """
    Pole, arm, backboard, rim and 8 net strands for the basket at `x_offset`.
    Everything hangs off the pole at (x_offset, POLE_HEIGHT / 2, 0).
    """
    palette = palette or court_palette()
    direction = side_direction(x_offset)

    pole = Cylinder(
        POLE_RADIUS, POLE_RADIUS, POLE_HEIGHT,
        placement=Placement((x_offset, POLE_HEIGHT / 2, 0.0)),
        material=palette.support,
        name="pole",
    )

    arm_end_x = pole.placement.position[0] + direction * ARM_LENGTH
    arm = segment(
        (x_offset, RIM_HEIGHT + ARM_RISE, 0.0), (arm_end_x, RIM_HEIGHT, 0.0),
        material=palette.line, name="arm",
    )

    backboard = Box(
        BACKBOARD_WIDTH, BACKBOARD_HEIGHT, BACKBOARD_THICKNESS,
        placement=Placement((arm_end_x, RIM_HEIGHT, 0.0), (0.0, -direction * math.pi / 2, 0.0)),
        material=palette.backboard,
        name="backboard",
    )

    rim = Torus(
        RIM_RADIUS, RIM_THICKNESS, RIM_RADIAL_SEGMENTS, RIM_TUBULAR_SEGMENTS,
        placement=Placement(rim_center(x_offset), (math.pi / 2, 0.0, 0.0)),
        material=palette.rim,
        name="rim",
    )

    return [pole, arm, backboard, rim, *build_net(rim.placement.position, palette)]


def build_court_layout(palette: Optional[CourtPalette] = None) -> CourtLayout:
    """Court, markings, both three-point lines and both hoops (left first)."""
    palette = palette or court_palette()
    layout = CourtLayout(
        slab=build_court_slab(palette),
        center_markings=tuple(build_center_markings(palette)),
        three_point_lines=tuple(
            tuple(build_three_point_line(x, palette)) for x in (-HALF_LENGTH, HALF_LENGTH)
        ),
        hoops=tuple(tuple(build_hoop(x, palette)) for x in (-HALF_LENGTH, HALF_LENGTH)),
    )
    logger.debug("Court layout built: %d primitives", len(layout))
    return layout


def court_layout_points(primitives) -> np.ndarray:
    """(N, 3) array of every anchor point in `primitives`."""
    pts = [p for prim in primitives for p in anchor_points(prim)]
    return np.asarray(pts, dtype=float).reshape(-1, 3)


__all__ = [
    "COURT_LENGTH", "COURT_WIDTH", "COURT_THICKNESS", "HALF_LENGTH",
    "CENTER_LINE_Y", "THREE_PT_Y", "CENTER_CIRCLE_RADIUS", "CENTER_CIRCLE_SEGMENTS",
    "THREE_PT_RADIUS", "THREE_PT_SIDE", "THREE_PT_SEGMENTS",
    "RIM_HEIGHT", "BACKBOARD_WIDTH", "BACKBOARD_HEIGHT", "BACKBOARD_THICKNESS",
    "RIM_RADIUS", "RIM_THICKNESS", "NET_LENGTH", "NET_SEGMENTS",
    "POLE_RADIUS", "POLE_HEIGHT", "ARM_LENGTH", "RIM_OFFSET", "RIM_OFFSET_SCALE",
    "side_direction", "three_point_angle", "circle_points", "rim_center",
    "build_court_slab", "build_center_markings", "build_three_point_line",
    "build_net", "build_hoop", "build_court_layout", "court_layout_points",
]
