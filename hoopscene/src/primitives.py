"""
Primitive data model for the court scene.
- Point3 tuples in court space (meters, Y up)
- Arc evaluator (center in XZ, angle sweep, winding)
- Primitive variants: Box, Cylinder, Torus, Sphere, Polyline, PolylineLoop
- CourtLayout aggregate
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union
import math

from .materials import Material

Point3 = Tuple[float, float, float]

_EPS = 1e-12


@dataclass(frozen=True)
class Placement:
    """Position plus Euler rotation (radians, applied X then Y then Z)."""
    position: Point3 = (0.0, 0.0, 0.0)
    rotation: Point3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Arc:
    """
    Circular arc in the XZ plane.

    Angles are measured from +X toward +Z. `clockwise=False` sweeps with
    increasing angle. A start equal to the end (mod 2pi) is a full turn only
    when the raw difference is non-zero.
    """
    center_x: float
    center_z: float
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool = False
    samples: int = 64

    def __post_init__(self):
        if self.samples < 2:
            raise ValueError(f"Arc needs at least 2 samples, got {self.samples}")

    @property
    def sweep(self) -> float:
        delta = self.end_angle - self.start_angle
        same_points = abs(delta) < _EPS
        delta = math.fmod(delta, 2 * math.pi)
        if delta < 0:
            delta += 2 * math.pi
        if delta < _EPS:
            delta = 0.0 if same_points else 2 * math.pi
        if self.clockwise and not same_points:
            delta = -2 * math.pi if delta == 2 * math.pi else delta - 2 * math.pi
        return delta

    def angles(self, endpoint: bool = True) -> Iterator[float]:
        steps = self.samples - 1 if endpoint else self.samples
        sweep = self.sweep
        for i in range(self.samples):
            yield self.start_angle + sweep * (i / steps)

    def points(self, y: float, endpoint: bool = True) -> Iterator[Point3]:
        """Yield `samples` points at height `y`. Restartable: each call is a new pass."""
        for a in self.angles(endpoint=endpoint):
            yield (
                self.center_x + self.radius * math.cos(a),
                y,
                self.center_z + self.radius * math.sin(a),
            )


@dataclass(frozen=True)
class Box:
    width: float
    height: float
    depth: float
    placement: Placement = Placement()
    material: Optional[Material] = None
    name: str = "box"
    cast_shadow: bool = False
    receive_shadow: bool = False


@dataclass(frozen=True)
class Cylinder:
    top_radius: float
    bottom_radius: float
    height: float
    radial_segments: int = 32
    placement: Placement = Placement()
    material: Optional[Material] = None
    name: str = "cylinder"
    cast_shadow: bool = False
    receive_shadow: bool = False


@dataclass(frozen=True)
class Torus:
    major_radius: float
    tube_radius: float
    radial_segments: int = 16
    tubular_segments: int = 100
    placement: Placement = Placement()
    material: Optional[Material] = None
    name: str = "torus"
    cast_shadow: bool = False
    receive_shadow: bool = False


@dataclass(frozen=True)
class Sphere:
    radius: float
    width_segments: int = 32
    height_segments: int = 16
    placement: Placement = Placement()
    material: Optional[Material] = None
    name: str = "sphere"
    cast_shadow: bool = False
    receive_shadow: bool = False


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Point3, ...]
    material: Optional[Material] = None
    name: str = "line"

    @property
    def length(self) -> float:
        return sum(math.dist(a, b) for a, b in zip(self.points, self.points[1:]))


@dataclass(frozen=True)
class PolylineLoop:
    """Closed polyline; the last point connects back to the first."""
    points: Tuple[Point3, ...]
    material: Optional[Material] = None
    name: str = "loop"


Primitive = Union[Box, Cylinder, Torus, Sphere, Polyline, PolylineLoop]
MESH_TYPES = (Box, Cylinder, Torus, Sphere)
LINE_TYPES = (Polyline, PolylineLoop)


def segment(start: Point3, end: Point3, material: Optional[Material] = None, name: str = "segment") -> Polyline:
    return Polyline(points=(tuple(map(float, start)), tuple(map(float, end))), material=material, name=name)


def anchor_points(primitive: Primitive) -> Tuple[Point3, ...]:
    """Vertices of line primitives, placement position of mesh primitives."""
    if isinstance(primitive, LINE_TYPES):
        return primitive.points
    return (primitive.placement.position,)


@dataclass(frozen=True)
class CourtLayout:
    """Everything the court generator produces for one court."""
    slab: Box
    center_markings: Tuple[Primitive, ...]
    three_point_lines: Tuple[Tuple[Primitive, ...], ...]
    hoops: Tuple[Tuple[Primitive, ...], ...]

    def primitives(self) -> Tuple[Primitive, ...]:
        out = [self.slab, *self.center_markings]
        for group in self.three_point_lines:
            out.extend(group)
        for group in self.hoops:
            out.extend(group)
        return tuple(out)

    def __len__(self) -> int:
        return len(self.primitives())
