"""Launch parameters shared by all renderers, and the helpers that fill them."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field, fields
from os import PathLike
from typing import Dict, List, Sequence, Tuple, Union

from exastitch.camera import CameraFrame
from exastitch.common import (
    CLIP_PLANES_MAX,
    DIRECT_LIGHT_INTEGRATOR,
    LIGHTS_MAX,
    PATH_TRACING_INTEGRATOR,
    RAY_MARCHING_INTEGRATOR,
    SHADE_MODE_DEFAULT,
    SHADE_MODE_GRIDLETS,
    SHADE_MODE_TEASER,
    Box3f,
)

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]
Range = Tuple[float, float]
Box2 = Tuple[Vec2, Vec2]
# Affine transform as columns vx, vy, vz and translation p, 12 floats.
Affine3 = Tuple[float, ...]

IDENTITY_AFFINE: Affine3 = (
    1.0, 0.0, 0.0,
    0.0, 1.0, 0.0,
    0.0, 0.0, 1.0,
    0.0, 0.0, 0.0,
)

_MAJORANT_COUNT = struct.Struct("<Q")
_MAJORANT_RECORD = struct.Struct("<7f")


class IntegratorType(enum.IntEnum):
    """Rendering algorithm selected through the ``integrator`` parameter."""

    PATH_TRACER = PATH_TRACING_INTEGRATOR
    DIRECT_LIGHTING = DIRECT_LIGHT_INTEGRATOR
    RAY_MARCHER = RAY_MARCHING_INTEGRATOR


@dataclass
class ClipPlane:
    """Clip plane ``dot(x, normal) == d``."""

    enabled: bool = False
    normal: Vec3 = (0.0, 0.0, 1.0)
    d: float = 0.0


@dataclass
class LightSource:
    """Point light."""

    pos: Vec3 = (0.0, 0.0, 0.0)
    intensity: float = 0.0
    on: bool = False


@dataclass
class TransferFunction:
    """RGBA colour map over an absolute value domain.

    ``rel_domain`` selects, in percent of ``abs_domain``, the part of the
    value range the colour map is stretched over.
    """

    color_map: List[Vec4] = field(default_factory=list)
    abs_domain: Range = (0.0, 1.0)
    rel_domain: Range = (0.0, 100.0)
    opacity_scale: float = 1.0

    def effective_domain(self) -> Range:
        """Absolute value range that the colour map covers."""
        lo, hi = self.abs_domain
        span = hi - lo
        return (
            lo + (self.rel_domain[0] / 100.0) * span,
            lo + (self.rel_domain[1] / 100.0) * span,
        )


def _zero_camera() -> CameraFrame:
    zero = (0.0, 0.0, 0.0)
    return CameraFrame(org=zero, dir_00=zero, dir_du=zero, dir_dv=zero)


@dataclass
class LaunchParams:
    """Every parameter a frame launch reads, with the defaults set at start-up."""

    accum_id: int = 0
    integrator: IntegratorType = IntegratorType.PATH_TRACER
    shade_mode: int = SHADE_MODE_DEFAULT
    world_space_bounds: Box3f = field(default_factory=Box3f)
    voxel_space_transform: Affine3 = IDENTITY_AFFINE
    light_space_transform: Affine3 = IDENTITY_AFFINE
    transfer_func: TransferFunction = field(default_factory=TransferFunction)
    camera: CameraFrame = field(default_factory=_zero_camera)
    sub_image_value: Box2 = ((0.0, 0.0), (0.0, 1.0))
    sub_image_selection: Box2 = ((0.0, 0.0), (1.0, 1.0))
    sub_image_active: bool = False
    sub_image_selecting: bool = False
    dt: float = 1.0
    spp: int = 1
    heat_map_enabled: bool = False
    heat_map_scale: float = 1.0
    clip_planes: List[ClipPlane] = field(
        default_factory=lambda: [ClipPlane() for _ in range(CLIP_PLANES_MAX)]
    )
    lights: List[LightSource] = field(
        default_factory=lambda: [LightSource() for _ in range(LIGHTS_MAX)]
    )


def pretty_bytes(num_bytes: int) -> str:
    """Human-readable byte count with binary K/M/G/T suffixes."""
    if num_bytes < 0:
        raise ValueError("byte count must not be negative")
    for exponent, suffix in ((4, "T"), (3, "G"), (2, "M"), (1, "K")):
        unit = 1024 ** exponent
        if num_bytes >= unit:
            return f"{num_bytes / unit:.2f}{suffix}"
    return str(num_bytes)


@dataclass
class MemoryStats:
    """Byte counts of the data a model and its meshes keep."""

    elem_vertex: int = 0
    elem_index: int = 0
    gridlets: int = 0
    empty_scalars: int = 0
    non_empty_scalars: int = 0
    amr_cells: int = 0
    amr_scalars: int = 0
    exa_bricks: int = 0
    exa_scalars: int = 0
    abrs: int = 0
    abr_leaf_list: int = 0
    mesh_vertex: int = 0
    mesh_index: int = 0

    def total(self) -> int:
        """Sum of all counts except the ABR leaf list."""
        return sum(
            getattr(self, f.name) for f in fields(self) if f.name != "abr_leaf_list"
        )

    def report(self) -> str:
        """Multi-line table of all counts and the total."""
        rows = (
            ("elem.vertex", self.elem_vertex),
            ("elem.index", self.elem_index),
            ("Non-empty scalars", self.non_empty_scalars),
            ("Empty scalars", self.empty_scalars),
            ("Gridlets", self.gridlets),
            ("AMR cells", self.amr_cells),
            ("AMR scalars", self.amr_scalars),
            ("EXA bricks", self.exa_bricks),
            ("EXA scalars", self.exa_scalars),
            ("EXA ABRs", self.abrs),
            ("EXA ABR leaf list", self.abr_leaf_list),
            ("mesh.vertex", self.mesh_vertex),
            ("mesh.index", self.mesh_index),
            ("TOTAL", self.total()),
        )
        lines = [" ====== Memory Stats (bytes) ======= "]
        lines.extend(f"{name.ljust(20, '.')}: {pretty_bytes(value)}" for name, value in rows)
        return "\n".join(lines)


def opacity_scale_factor(scale: float) -> float:
    """Opacity multiplier for a slider value; 100 means unchanged."""
    return 1.1 ** (scale - 100.0)


def shade_modes() -> Dict[int, str]:
    """Available shade modes by id."""
    return {
        SHADE_MODE_DEFAULT: "default",
        SHADE_MODE_GRIDLETS: "gridlets",
        SHADE_MODE_TEASER: "teaser",
    }


def light_space_scale(cell_bounds: Box3f) -> float:
    """Uniform scale bringing the largest cell-space extent to at most 1000."""
    scale = 1.0
    extent = max(cell_bounds.size())
    while extent > 1000.0:
        extent /= 1000.0
        scale /= 1000.0
    return scale


def load_majorants(file_name: Union[str, PathLike]) -> List[Tuple[Box3f, float]]:
    """Read majorant domains and their maximum opacities from a binary file.

    The file holds a uint64 count followed by that many records of six
    float32 box coordinates (lower xyz, upper xyz) and one float32 opacity.
    """
    with open(file_name, "rb") as stream:
        head = stream.read(_MAJORANT_COUNT.size)
        if len(head) < _MAJORANT_COUNT.size:
            raise ValueError("truncated majorants file: missing count")
        (count,) = _MAJORANT_COUNT.unpack(head)
        data = stream.read(count * _MAJORANT_RECORD.size)
    if len(data) < count * _MAJORANT_RECORD.size:
        raise ValueError("truncated majorants file: missing records")
    result = []
    for rec in _MAJORANT_RECORD.iter_unpack(data):
        result.append((Box3f(rec[0:3], rec[3:6]), rec[6]))
    return result