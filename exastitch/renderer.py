"""Renderer state: launch parameters, accumulation and transfer-function bookkeeping."""

from __future__ import annotations

import copy
import math
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from exastitch.camera import CameraFrame
from exastitch.common import Box3f
from exastitch.launchparams import (
    IDENTITY_AFFINE,
    Affine3,
    Box2,
    IntegratorType,
    LaunchParams,
    Range,
    Vec3,
    Vec4,
    light_space_scale,
    opacity_scale_factor,
    shade_modes,
)
from exastitch.trianglemesh import TriangleMesh

Vec2i = Tuple[int, int]
MajorantUpdater = Callable[[List[Vec4], Range], Sequence[float]]


def _vec3(v: Sequence[float]) -> Vec3:
    if len(v) != 3:
        raise ValueError(f"expected 3 components, got {len(v)}")
    return (float(v[0]), float(v[1]), float(v[2]))


def _box2(region: Sequence[Sequence[float]]) -> Box2:
    lower, upper = region
    return ((float(lower[0]), float(lower[1])), (float(upper[0]), float(upper[1])))


def _scale_affine(s: float) -> Affine3:
    return (
        s, 0.0, 0.0,
        0.0, s, 0.0,
        0.0, 0.0, s,
        0.0, 0.0, 0.0,
    )


class RenderState:
    """Everything a frame launch needs, kept consistent across parameter changes.

    Changes that invalidate the converged image reset the accumulation
    counter. ``majorant_updater``, if given, is called with the colour map
    and the effective value range whenever either changes and returns the
    per-region maximum opacities. Own majorants, when supplied, take
    precedence and keep their fixed opacities.
    """

    def __init__(
        self,
        model_bounds: Optional[Box3f] = None,
        value_range: Range = (math.inf, -math.inf),
        cell_bounds: Optional[Box3f] = None,
        voxel_space_transform: Affine3 = IDENTITY_AFFINE,
        majorants: Optional[Iterable[Tuple[Box3f, float]]] = None,
        majorant_updater: Optional[MajorantUpdater] = None,
    ) -> None:
        self.model_bounds = Box3f()
        if model_bounds is not None:
            self.model_bounds.extend(model_bounds)
        self.value_range: Range = (float(value_range[0]), float(value_range[1]))
        self.majorants: List[Tuple[Box3f, float]] = list(majorants or [])
        self.majorant_updater = majorant_updater
        self.max_opacities: Optional[List[float]] = (
            [opacity for _, opacity in self.majorants] if self.majorants else None
        )
        self.meshes: List[TriangleMesh] = []

        self.accum_id = 0
        self.fb_size: Vec2i = (1, 1)
        self.accum_buffer_size = 0
        self.spp = 1
        self.heat_map_enabled = False
        self.heat_map_scale = 1.0

        scale = light_space_scale(cell_bounds) if cell_bounds is not None else 1.0
        self.light_space_transform: Affine3 = _scale_affine(scale)

        self.params = LaunchParams()
        self.params.voxel_space_transform = tuple(float(v) for v in voxel_space_transform)
        self.params.light_space_transform = self.light_space_transform
        self._update_world_bounds()

        center_z = 0.0 if self.model_bounds.empty() else self.model_bounds.center()[2]
        for plane in self.params.clip_planes:
            plane.enabled = False
            plane.normal = (0.0, 0.0, 1.0)
            plane.d = center_z

    # ------------------------------------------------------------------
    def _update_world_bounds(self) -> None:
        self.params.world_space_bounds = Box3f(self.model_bounds.lower, self.model_bounds.upper)

    def _update_majorants(self) -> None:
        if self.majorants:
            self.max_opacities = [opacity for _, opacity in self.majorants]
        elif self.majorant_updater is not None:
            tf = self.params.transfer_func
            self.max_opacities = list(
                self.majorant_updater(list(tf.color_map), tf.effective_domain())
            )

    # ------------------------------------------------------------------
    def set_camera(
        self,
        org: Sequence[float],
        dir_00: Sequence[float],
        dir_du: Sequence[float],
        dir_dv: Sequence[float],
    ) -> None:
        """Set the primary-ray origin and image-plane vectors."""
        self.params.camera = CameraFrame(
            org=_vec3(org), dir_00=_vec3(dir_00), dir_du=_vec3(dir_du), dir_dv=_vec3(dir_dv)
        )

    def resize(self, new_size: Sequence[int]) -> None:
        """Resize the viewport and its accumulation buffer."""
        size = (int(new_size[0]), int(new_size[1]))
        if size[0] <= 0 or size[1] <= 0:
            raise ValueError("frame buffer size must be positive")
        if size != self.fb_size or self.accum_buffer_size == 0:
            self.accum_buffer_size = size[0] * size[1]
            self.fb_size = size

    def next_frame(self) -> LaunchParams:
        """Parameters for the next frame launch; advances the accumulation counter."""
        params = self.params
        params.accum_id = self.accum_id
        self.accum_id += 1
        params.dt = 1.0
        params.spp = max(self.spp, 1)
        params.heat_map_enabled = bool(self.heat_map_enabled)
        params.heat_map_scale = float(self.heat_map_scale)
        return copy.deepcopy(params)

    def set_type(self, integrator: int) -> None:
        """Select the rendering algorithm."""
        self.params.integrator = IntegratorType(integrator)
        self.accum_id = 0

    def set_color_map(self, color_map: Iterable[Sequence[float]]) -> None:
        """Replace the RGBA transfer function."""
        entries: List[Vec4] = []
        for c in color_map:
            if len(c) != 4:
                raise ValueError("colour map entries need 4 components")
            entries.append((float(c[0]), float(c[1]), float(c[2]), float(c[3])))
        self.params.transfer_func.color_map = entries
        self._update_majorants()
        self.accum_id = 0

    def set_range(self, domain: Sequence[float]) -> None:
        """Set the absolute value domain of the transfer function."""
        lo, hi = float(domain[0]), float(domain[1])
        self.params.transfer_func.abs_domain = (lo, hi)
        self._update_majorants()

    def set_rel_domain(self, rel_domain: Sequence[float]) -> None:
        """Set the relative (percent) sub-range of the absolute domain."""
        self.params.transfer_func.rel_domain = (float(rel_domain[0]), float(rel_domain[1]))
        self.set_range(self.params.transfer_func.abs_domain)

    def set_opacity_scale(self, scale: float) -> None:
        """Set the opacity slider value; 100 leaves opacities unchanged."""
        self.params.transfer_func.opacity_scale = opacity_scale_factor(scale)

    def set_clip_plane(
        self, plane_id: int, enabled: bool, normal: Sequence[float], d: float
    ) -> None:
        """Configure clip plane ``plane_id``."""
        if not 0 <= plane_id < len(self.params.clip_planes):
            raise ValueError(f"clip plane {plane_id} not valid")
        plane = self.params.clip_planes[plane_id]
        plane.enabled = bool(enabled)
        plane.normal = _vec3(normal)
        plane.d = float(d)
        self.accum_id = 0

    def set_shade_mode(self, mode: int) -> None:
        """Select a shade mode, see :func:`exastitch.launchparams.shade_modes`."""
        if mode not in shade_modes():
            raise ValueError(f"unknown shade mode {mode}")
        self.params.shade_mode = int(mode)
        self.accum_id = 0

    def set_sub_image(self, region: Sequence[Sequence[float]], active: bool) -> None:
        """Restrict rendering to a normalised sub-region of the image."""
        self.params.sub_image_value = _box2(region)
        self.params.sub_image_active = bool(active)
        self.accum_id = 0

    def set_sub_image_selection(self, region: Sequence[Sequence[float]], active: bool) -> None:
        """Set the sub-image region currently being selected."""
        self.params.sub_image_selection = _box2(region)
        self.params.sub_image_selecting = bool(active)
        self.accum_id = 0

    def set_light_source(
        self, light_id: int, pos: Sequence[float], intensity: float, on: bool
    ) -> None:
        """Configure a point light; only light 0 is supported."""
        if light_id != 0:
            raise ValueError(f"light source {light_id} not supported")
        light = self.params.lights[light_id]
        light.pos = _vec3(pos)
        light.intensity = float(intensity)
        light.on = bool(on)
        self.accum_id = 0

    def set_light_space_transform(self, xform: Sequence[float]) -> None:
        """Set the 12-float affine transform applied to light positions."""
        values = tuple(float(v) for v in xform)
        if len(values) != 12:
            raise ValueError(f"an affine transform needs 12 values, got {len(values)}")
        self.light_space_transform = values
        self.params.light_space_transform = values
        self.accum_id = 0

    def reset_accum(self) -> None:
        """Restart progressive accumulation."""
        self.accum_id = 0

    def add_meshes(self, meshes: Iterable[TriangleMesh]) -> Box3f:
        """Add triangle meshes and grow the world bounds around them; returns their bounds."""
        mesh_bounds = Box3f()
        for mesh in meshes:
            mesh_bounds.extend(mesh.bounds())
            self.meshes.append(mesh)
        if not mesh_bounds.empty():
            self.model_bounds.extend(mesh_bounds)
            self._update_world_bounds()
        return mesh_bounds