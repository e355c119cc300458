"""Gridlets: small dense blocks of vertex-centred scalars on one AMR level."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from exastitch.common import Box3f, lerp

Vec3i = Tuple[int, int, int]


@dataclass
class Gridlet:
    """A block of cells on refinement level ``level``.

    ``begin`` is the offset of this gridlet's first scalar in the shared
    scalar array; the gridlet owns ``prod(dims + 1)`` scalars.
    """

    lower: Vec3i
    level: int
    dims: Vec3i
    begin: int = 0

    def bounds(self) -> Box3f:
        """World-space box spanned by the gridlet's scalar positions."""
        cell_width = float(1 << self.level)
        return Box3f(
            tuple((lo + 0.5) * cell_width for lo in self.lower),
            tuple((lo + d + 0.5) * cell_width for lo, d in zip(self.lower, self.dims)),
        )


def intersect_gridlet(
    pos: Sequence[float], gridlet: Gridlet, scalars: Sequence[float]
) -> Optional[Tuple[float, int]]:
    """Trilinearly interpolate the gridlet at ``pos``.

    Returns ``(value, cell_id)``, or None if ``pos`` lies outside the
    gridlet or any of the eight surrounding scalars is NaN.
    """
    bounds = gridlet.bounds()
    if not bounds.contains(pos):
        return None

    nx, ny, nz = (d + 1 for d in gridlet.dims)
    cell_width = float(1 << gridlet.level)
    local = tuple((p - lo) / cell_width for p, lo in zip(pos, bounds.lower))
    imin = tuple(int(c) for c in local)
    imax = tuple(min(i + 1, n - 1) for i, n in zip(imin, (nx, ny, nz)))

    def fetch(x: int, y: int, z: int) -> float:
        return scalars[gridlet.begin + z * ny * nx + y * nx + x]

    f1 = fetch(imin[0], imin[1], imin[2])
    f2 = fetch(imax[0], imin[1], imin[2])
    f3 = fetch(imin[0], imax[1], imin[2])
    f4 = fetch(imax[0], imax[1], imin[2])
    f5 = fetch(imin[0], imin[1], imax[2])
    f6 = fetch(imax[0], imin[1], imax[2])
    f7 = fetch(imin[0], imax[1], imax[2])
    f8 = fetch(imax[0], imax[1], imax[2])

    if any(math.isnan(f) for f in (f1, f2, f3, f4, f5, f6, f7, f8)):
        return None

    fx, fy, fz = (c - i for c, i in zip(local, imin))
    f12 = lerp(f1, f2, fx)
    f56 = lerp(f5, f6, fx)
    f34 = lerp(f3, f4, fx)
    f78 = lerp(f7, f8, fx)
    f1234 = lerp(f12, f34, fy)
    f5678 = lerp(f56, f78, fy)
    value = lerp(f1234, f5678, fz)

    dx, dy, _ = gridlet.dims
    cell_id = imin[2] * dy * dx + imin[1] * dx + imin[0]
    return value, cell_id