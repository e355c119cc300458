"""Point location and interpolation in unstructured volume elements.

Vertices are given as ``(x, y, z, value)`` sequences; query points as
``(x, y, z)``. Each ``intersect_*`` function returns the interpolated
scalar at the query point, or None if the point lies outside the element.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

Vec3 = Tuple[float, float, float]

_BLEND_EPS = 1e-10


def _xyz(v: Sequence[float]) -> Vec3:
    return (float(v[0]), float(v[1]), float(v[2]))


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _div(num: float, den: float) -> float:
    """Floating-point division that yields inf/nan instead of raising."""
    if den == 0.0:
        if num == 0.0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


@dataclass(frozen=True)
class Plane:
    """Plane ``dot(x, normal) == d``; the normal need not be unit length."""

    normal: Vec3
    d: float

    def eval(self, v: Sequence[float]) -> float:
        """Signed, unnormalised distance of ``v`` (first three components) to the plane."""
        return _dot(_xyz(v), self.normal) - self.d


def make_plane(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> Plane:
    """Plane through three points, with normal ``cross(b - a, c - a)``."""
    pa, pb, pc = _xyz(a), _xyz(b), _xyz(c)
    normal = _cross(_sub(pb, pa), _sub(pc, pa))
    return Plane(normal, _dot(pa, normal))


def intersect_tet(
    p: Sequence[float],
    a: Sequence[float],
    b: Sequence[float],
    c: Sequence[float],
    d: Sequence[float],
) -> Optional[float]:
    """Barycentric interpolation inside the tetrahedron ``abcd``."""
    point = _xyz(p)
    va = _sub(_xyz(a), point)
    vb = _sub(_xyz(b), point)
    vc = _sub(_xyz(c), point)
    vd = _sub(_xyz(d), point)

    pa = make_plane(vb, vd, vc)
    pb = make_plane(va, vc, vd)
    pc = make_plane(va, vd, vb)
    pd = make_plane(va, vb, vc)

    origin = (0.0, 0.0, 0.0)
    fa = _div(pa.eval(origin), pa.eval(va))
    if fa < 0.0 or fa > 1.0:
        return None
    fb = _div(pb.eval(origin), pb.eval(vb))
    if fb < 0.0:
        return None
    fc = _div(pc.eval(origin), pc.eval(vc))
    if fc < 0.0:
        return None
    fd = _div(pd.eval(origin), pd.eval(vd))
    if fd < 0.0:
        return None

    return fa * a[3] + fb * b[3] + fc * c[3] + fd * d[3]


def intersect_pair(
    p: Sequence[float],
    a: Sequence[float],
    b: Sequence[float],
    c: Sequence[float],
    d0: Sequence[float],
    d1: Sequence[float],
) -> Optional[float]:
    """Two tetrahedra sharing the face ``abc``, with apexes ``d0`` and ``d1``."""
    value = intersect_tet(p, a, b, c, d0)
    if value is not None:
        return value
    return intersect_tet(p, a, c, b, d1)


def intersect_pyr(
    p: Sequence[float],
    v0: Sequence[float],
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    v4: Sequence[float],
) -> Optional[float]:
    """Interpolate inside a pyramid with base quad ``v0..v3`` and apex ``v4``."""
    point = _xyz(p)
    p0, p1, p2, p3, p4 = (_xyz(v) for v in (v0, v1, v2, v3, v4))
    f0, f1, f2, f3, f4 = (v[3] for v in (v0, v1, v2, v3, v4))

    base = make_plane(p0, p1, p2)
    w = _div(base.eval(point), base.eval(p4))

    u0 = make_plane(p0, p4, p1).eval(point)
    if u0 < 0.0:
        return None
    u1 = make_plane(p2, p4, p3).eval(point)
    if u1 < 0.0:
        return None
    u = u0 / (u0 + u1 + _BLEND_EPS)

    v0_ = make_plane(p0, p3, p4).eval(point)
    if v0_ < 0.0:
        return None
    v1_ = make_plane(p1, p4, p2).eval(point)
    if v1_ < 0.0:
        return None
    v = v0_ / (v0_ + v1_ + _BLEND_EPS)

    return w * f4 + (1.0 - w) * (
        (1.0 - u) * (1.0 - v) * f0
        + (1.0 - u) * v * f1
        + u * (1.0 - v) * f3
        + u * v * f2
    )


def intersect_wedge(
    p: Sequence[float],
    v0: Sequence[float],
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    v4: Sequence[float],
    v5: Sequence[float],
) -> Optional[float]:
    """Interpolate inside a wedge with triangles ``v0 v1 v2`` and ``v3 v4 v5``."""
    point = _xyz(p)
    p0, p1, p2, p3, p4, p5 = (_xyz(v) for v in (v0, v1, v2, v3, v4, v5))
    f0, f1, f2, f3, f4, f5 = (v[3] for v in (v0, v1, v2, v3, v4, v5))

    base = make_plane(p0, p1, p3)
    w0 = base.eval(point)
    if w0 < 0.0:
        return None

    ridge = _sub(p5, p2)
    top_normal = _cross(_cross(base.normal, ridge), ridge)
    top = Plane(top_normal, _dot(top_normal, p2))
    w1 = top.eval(point)
    if w1 < 0.0:
        return None
    w = w0 / (w0 + w1 + _BLEND_EPS)

    u0 = make_plane(p0, p2, p1).eval(point)
    if u0 < 0.0:
        return None
    u1 = make_plane(p3, p4, p5).eval(point)
    if u1 < 0.0:
        return None
    u = u0 / (u0 + u1 + _BLEND_EPS)

    l0 = make_plane(p0, p3, p2).eval(point)
    if l0 < 0.0:
        return None
    l1 = make_plane(p1, p2, p4).eval(point)
    if l1 < 0.0:
        return None
    v = l0 / (l0 + l1 + _BLEND_EPS)

    fbase = (
        (1.0 - u) * (1.0 - v) * f0
        + (1.0 - u) * v * f1
        + u * (1.0 - v) * f3
        + u * v * f4
    )
    ftop = (1.0 - u) * f2 + u * f5
    return (1.0 - w) * fbase + w * ftop


def intersect_hex(
    p: Sequence[float],
    v0: Sequence[float],
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    v4: Sequence[float],
    v5: Sequence[float],
    v6: Sequence[float],
    v7: Sequence[float],
) -> Optional[float]:
    """Trilinear interpolation inside a hexahedron (bottom ``v0..v3``, top ``v4..v7``)."""
    point = _xyz(p)
    f0, f1, f2, f3, f4, f5, f6, f7 = (
        v[3] for v in (v0, v1, v2, v3, v4, v5, v6, v7)
    )

    faces = (
        make_plane(v0, v4, v1),  # front
        make_plane(v3, v2, v7),  # back
        make_plane(v0, v3, v4),  # left
        make_plane(v1, v5, v2),  # right
        make_plane(v4, v7, v5),  # top
        make_plane(v0, v1, v3),  # bottom
    )
    distances = []
    for face in faces:
        t = face.eval(point)
        if t < 0.0:
            return None
        distances.append(t)
    t_frt, t_bck, t_lft, t_rgt, t_top, t_btm = distances

    fx = _div(t_lft, t_lft + t_rgt)
    fy = _div(t_frt, t_frt + t_bck)
    fz = _div(t_btm, t_btm + t_top)

    return (
        (1.0 - fz) * (1.0 - fy) * (1.0 - fx) * f0
        + (1.0 - fz) * (1.0 - fy) * fx * f1
        + (1.0 - fz) * fy * (1.0 - fx) * f3
        + (1.0 - fz) * fy * fx * f2
        + fz * (1.0 - fy) * (1.0 - fx) * f4
        + fz * (1.0 - fy) * fx * f5
        + fz * fy * (1.0 - fx) * f7
        + fz * fy * fx * f6
    )


_ELEMENT_KINDS: Dict[str, Tuple[Callable[..., Optional[float]], int]] = {
    "tet": (intersect_tet, 4),
    "pair": (intersect_pair, 5),
    "pyr": (intersect_pyr, 5),
    "wedge": (intersect_wedge, 6),
    "hex": (intersect_hex, 8),
}


def intersect_indexed(
    kind: str,
    p: Sequence[float],
    vertices: Sequence[Sequence[float]],
    indices: Sequence[int],
) -> Optional[float]:
    """Intersect an element whose corners are looked up in a shared vertex list.

    ``kind`` is one of ``"tet"``, ``"pair"``, ``"pyr"``, ``"wedge"``, ``"hex"``.
    """
    try:
        func, count = _ELEMENT_KINDS[kind]
    except KeyError:
        raise ValueError(f"unknown element kind: {kind!r}") from None
    if len(indices) < count:
        raise ValueError(f"element kind {kind!r} needs {count} indices, got {len(indices)}")
    corners = [vertices[i] for i in indices[:count]]
    return func(p, *corners)