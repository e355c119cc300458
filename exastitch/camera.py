"""Perspective pinhole camera producing the rays a renderer launches."""

from __future__ import annotations

import math
from typing import NamedTuple, Sequence, Tuple

Vec3 = Tuple[float, float, float]


class CameraFrame(NamedTuple):
    """Ray origin, direction to the lower-left pixel and per-pixel steps."""

    org: Vec3
    dir_00: Vec3
    dir_du: Vec3
    dir_dv: Vec3


def _vec(v: Sequence[float]) -> Vec3:
    return (float(v[0]), float(v[1]), float(v[2]))


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _mul(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _normalize(a: Vec3) -> Vec3:
    length = math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return _mul(a, 1.0 / length)


class Camera:
    """Perspective camera; call :meth:`commit` to change its parameters."""

    def __init__(self) -> None:
        self.commit()

    def commit(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        direction: Sequence[float] = (0.0, 0.0, 1.0),
        up: Sequence[float] = (0.0, 1.0, 0.0),
        fovy: float = math.radians(60.0),
        aspect: float = 1.0,
    ) -> None:
        """Recompute the image plane from the given view parameters."""
        self.pos = _vec(position)
        self.dir = _normalize(_vec(direction))
        self.up = _normalize(_vec(up))

        height = 2.0 * math.tan(0.5 * fovy)
        width = height * aspect

        self.dir_du = _mul(_normalize(_cross(self.dir, self.up)), width)
        self.dir_dv = _mul(_normalize(_cross(self.dir_du, self.dir)), height)
        self.dir_00 = tuple(
            d - 0.5 * du - 0.5 * dv
            for d, du, dv in zip(self.dir, self.dir_du, self.dir_dv)
        )

    def apply(self, fb_size: Sequence[int]) -> CameraFrame:
        """Camera vectors with the image-plane steps scaled to one pixel."""
        width, height = int(fb_size[0]), int(fb_size[1])
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer size must be positive")
        return CameraFrame(
            org=self.pos,
            dir_00=_vec(self.dir_00),
            dir_du=_mul(self.dir_du, 1.0 / width),
            dir_dv=_mul(self.dir_dv, 1.0 / height),
        )


def create_camera(subtype: str) -> Camera:
    """Create a camera of the given subtype; only ``"perspective"`` exists."""
    if subtype == "perspective":
        return Camera()
    raise ValueError(f"camera subtype {subtype!r} not supported")