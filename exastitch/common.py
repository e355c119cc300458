"""Shared constants, axis-aligned boxes and small math helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Tuple

Vec3 = Tuple[float, float, float]

RADIANCE_RAY_TYPE = 0
SAMPLING_RAY_TYPE = 1

CLIP_PLANES_MAX = 1
LIGHTS_MAX = 4

EXA_STITCH_SAMPLER = 0
AMR_CELL_SAMPLER = 1
EXA_BRICK_SAMPLER = 2

EXA_BRICK_SAMPLER_ABR_BVH = 0
EXA_BRICK_SAMPLER_EXT_BVH = 1

PATH_TRACING_INTEGRATOR = 0
DIRECT_LIGHT_INTEGRATOR = 1
RAY_MARCHING_INTEGRATOR = 2

SHADE_MODE_DEFAULT = 0
SHADE_MODE_GRIDLETS = 1
SHADE_MODE_TEASER = 2

EXABRICK_ABR_TRAVERSAL = 0
MC_DDA_TRAVERSAL = 1
MC_BVH_TRAVERSAL = 2
EXABRICK_KDTREE_TRAVERSAL = 3
EXABRICK_BVH_TRAVERSAL = 4
EXABRICK_EXT_BVH_TRAVERSAL = 5


def _vec3(values: Iterable[float]) -> Vec3:
    x, y, z = (float(v) for v in values)
    return (x, y, z)


@dataclass
class Box3f:
    """Axis-aligned 3D box; a default-constructed box is empty."""

    lower: Vec3 = field(default=(math.inf, math.inf, math.inf))
    upper: Vec3 = field(default=(-math.inf, -math.inf, -math.inf))

    def __post_init__(self) -> None:
        self.lower = _vec3(self.lower)
        self.upper = _vec3(self.upper)

    def empty(self) -> bool:
        """True if the box encloses no point."""
        return any(u < lo for lo, u in zip(self.lower, self.upper))

    def extend(self, other: "Box3f") -> "Box3f":
        """Grow this box to enclose another box."""
        self.lower = _vec3(min(a, b) for a, b in zip(self.lower, other.lower))
        self.upper = _vec3(max(a, b) for a, b in zip(self.upper, other.upper))
        return self

    def extend_point(self, point: Iterable[float]) -> "Box3f":
        """Grow this box to enclose a point."""
        p = _vec3(point)
        self.lower = _vec3(min(a, b) for a, b in zip(self.lower, p))
        self.upper = _vec3(max(a, b) for a, b in zip(self.upper, p))
        return self

    def contains(self, point: Iterable[float]) -> bool:
        """True if the point lies inside the box, borders included."""
        p = _vec3(point)
        return all(lo <= c <= u for lo, c, u in zip(self.lower, p, self.upper))

    def size(self) -> Vec3:
        """Edge lengths of the box."""
        return _vec3(u - lo for lo, u in zip(self.lower, self.upper))

    def center(self) -> Vec3:
        """Centre point of the box."""
        return _vec3((lo + u) * 0.5 for lo, u in zip(self.lower, self.upper))


def lerp(val1: float, val2: float, x: float) -> float:
    """Linear interpolation between val1 (x=0) and val2 (x=1)."""
    return (1.0 - x) * val1 + x * val2