"""Interactive placement of a point light by dragging it in screen space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

Vec2i = Tuple[int, int]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

_IDENTITY = tuple(1.0 if i % 5 == 0 else 0.0 for i in range(16))


@dataclass(frozen=True)
class Mat4:
    """4x4 matrix stored column-major, as OpenGL expects.

    ``m[row, col]`` reads element ``values[col * 4 + row]``.
    """

    values: Tuple[float, ...] = _IDENTITY

    def __post_init__(self) -> None:
        vals = tuple(float(v) for v in self.values)
        if len(vals) != 16:
            raise ValueError(f"a 4x4 matrix needs 16 values, got {len(vals)}")
        object.__setattr__(self, "values", vals)

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        return self.values[col * 4 + row]

    @staticmethod
    def identity() -> "Mat4":
        """The identity matrix."""
        return Mat4(_IDENTITY)

    @staticmethod
    def scale(s: Sequence[float]) -> "Mat4":
        """Diagonal scaling matrix for the factors ``s[0..2]``."""
        vals = list(_IDENTITY)
        vals[0], vals[5], vals[10] = float(s[0]), float(s[1]), float(s[2])
        return Mat4(tuple(vals))

    def __matmul__(self, other: "Mat4") -> "Mat4":
        return Mat4(
            tuple(
                sum(self[i, k] * other[k, j] for k in range(4))
                for j in range(4)
                for i in range(4)
            )
        )

    def transform(self, v: Sequence[float]) -> Vec4:
        """Multiply this matrix with a 4-component column vector."""
        if len(v) != 4:
            raise ValueError("transform expects a 4-component vector")
        x, y, z, w = (
            sum(self[i, k] * v[k] for k in range(4)) for i in range(4)
        )
        return (x, y, z, w)

    def inverse(self) -> "Mat4":
        """Inverse matrix; raises ValueError if the matrix is singular."""
        m = self

        def det2(m00: float, m01: float, m10: float, m11: float) -> float:
            return m00 * m11 - m10 * m01

        s0 = det2(m[0, 0], m[0, 1], m[1, 0], m[1, 1])
        s1 = det2(m[0, 0], m[0, 2], m[1, 0], m[1, 2])
        s2 = det2(m[0, 0], m[0, 3], m[1, 0], m[1, 3])
        s3 = det2(m[0, 1], m[0, 2], m[1, 1], m[1, 2])
        s4 = det2(m[0, 1], m[0, 3], m[1, 1], m[1, 3])
        s5 = det2(m[0, 2], m[0, 3], m[1, 2], m[1, 3])
        c5 = det2(m[2, 2], m[2, 3], m[3, 2], m[3, 3])
        c4 = det2(m[2, 1], m[2, 3], m[3, 1], m[3, 3])
        c3 = det2(m[2, 1], m[2, 2], m[3, 1], m[3, 2])
        c2 = det2(m[2, 0], m[2, 3], m[3, 0], m[3, 3])
        c1 = det2(m[2, 0], m[2, 2], m[3, 0], m[3, 2])
        c0 = det2(m[2, 0], m[2, 1], m[3, 0], m[3, 1])

        det = s0 * c5 - s1 * c4 + s2 * c3 + s3 * c2 - s4 * c1 + s5 * c0
        if det == 0.0:
            raise ValueError("matrix is singular")

        cofactors = (
            +m[1, 1] * c5 - m[1, 2] * c4 + m[1, 3] * c3,
            -m[1, 0] * c5 + m[1, 2] * c2 + m[1, 3] * c1,
            +m[1, 0] * c4 - m[1, 1] * c2 + m[1, 3] * c0,
            -m[1, 0] * c3 + m[1, 1] * c1 + m[1, 2] * c0,
            -m[0, 1] * c5 + m[0, 2] * c4 - m[0, 3] * c3,
            +m[0, 0] * c5 - m[0, 2] * c2 + m[0, 3] * c1,
            -m[0, 0] * c4 + m[0, 1] * c2 - m[0, 3] * c0,
            +m[0, 0] * c3 - m[0, 1] * c1 + m[0, 2] * c0,
            +m[3, 1] * s5 - m[3, 2] * s4 + m[3, 3] * s3,
            -m[3, 0] * s5 + m[3, 2] * s2 - m[3, 3] * s1,
            +m[3, 0] * s4 - m[3, 1] * s2 + m[3, 3] * s0,
            -m[3, 0] * s3 + m[3, 1] * s1 - m[3, 2] * s0,
            -m[2, 1] * s5 + m[2, 2] * s4 - m[2, 3] * s3,
            +m[2, 0] * s5 - m[2, 2] * s2 + m[2, 3] * s1,
            -m[2, 0] * s4 + m[2, 1] * s2 - m[2, 3] * s0,
            +m[2, 0] * s3 - m[2, 1] * s1 + m[2, 2] * s0,
        )
        return Mat4(tuple(c / det for c in cofactors))

    def __str__(self) -> str:
        return "\n".join(
            " ".join(repr(self[row, col]) for col in range(4)) for row in range(4)
        )


def project(
    obj: Sequence[float],
    modelview: Mat4,
    projection: Mat4,
    viewport: Sequence[float],
) -> Vec3:
    """Map an object-space point to window coordinates (like gluProject)."""
    x, y, z, w = (projection @ modelview).transform((obj[0], obj[1], obj[2], 1.0))
    vx, vy, vz = x / w, y / w, z / w
    return (
        viewport[0] + viewport[2] * (vx + 1.0) / 2.0,
        viewport[1] + viewport[3] * (vy + 1.0) / 2.0,
        (vz + 1.0) / 2.0,
    )


def unproject(
    win: Sequence[float],
    modelview: Mat4,
    projection: Mat4,
    viewport: Sequence[float],
) -> Vec3:
    """Map window coordinates back to object space (like gluUnProject)."""
    u = (
        2.0 * (win[0] - viewport[0]) / viewport[2] - 1.0,
        2.0 * (win[1] - viewport[1]) / viewport[3] - 1.0,
        2.0 * win[2] - 1.0,
        1.0,
    )
    x, y, z, w = (projection @ modelview).inverse().transform(u)
    return (x / w, y / w, z / w)


class LightInteractor:
    """Holds a light position that can be dragged with the mouse.

    Callbacks registered with :meth:`connect` receive the new position
    whenever it changes through user interaction.
    """

    def __init__(self) -> None:
        self.pos: Vec3 = (0.0, 0.0, 0.0)
        self.scale: float = 3.0
        self.view: Optional[Mat4] = None
        self.proj: Optional[Mat4] = None
        self.fb_size: Vec2i = (0, 0)
        self._active = False
        self._listeners: List[Callable[[Vec3], None]] = []

    @property
    def active(self) -> bool:
        return self._active

    @property
    def has_focus(self) -> bool:
        return True

    @property
    def radius(self) -> float:
        """Radius of the sphere that marks the light."""
        return self.scale / 10.0

    def connect(self, callback: Callable[[Vec3], None]) -> None:
        """Register a callback for light position changes."""
        self._listeners.append(callback)

    def _emit(self) -> None:
        for callback in self._listeners:
            callback(self.pos)

    def set_world_scale(self, s: float) -> None:
        self.scale = float(s)

    def update(
        self, view: Iterable[float], proj: Iterable[float], fb_size: Sequence[int]
    ) -> None:
        """Store the current column-major view and projection matrices and viewport size."""
        self.view = Mat4(tuple(view))
        self.proj = Mat4(tuple(proj))
        self.fb_size = (int(fb_size[0]), int(fb_size[1]))

    def mouse_button_left(self, where: Sequence[int], pressed: bool) -> None:
        """Announce the final position when the button is released."""
        if not pressed:
            self._emit()

    def mouse_drag_left(self, where: Sequence[int], delta: Sequence[int]) -> Vec3:
        """Move the light under the cursor, keeping its depth; returns the new position."""
        if self.view is None or self.proj is None:
            raise RuntimeError("update() must be called before dragging")
        viewport = (0, 0, self.fb_size[0], self.fb_size[1])
        _, _, depth = project(self.pos, self.view, self.proj, viewport)
        win = (float(where[0]), float(viewport[3] - where[1] - 1), depth)
        self.pos = unproject(win, self.view, self.proj, viewport)
        self._emit()
        return self.pos

    def set_pos(self, p: Sequence[float]) -> None:
        self.pos = (float(p[0]), float(p[1]), float(p[2]))

    def toggle_active(self) -> None:
        self._active = not self._active