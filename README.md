# exastitch

This package holds pure-Python building blocks for rendering
adaptive-mesh-refinement (AMR) and unstructured volume data. It depends only
on the standard library.

## Modules

- `exastitch.common` provides the `Box3f` axis-aligned box, `lerp`, and
  integer constants for ray types, integrators, shade modes and traversal
  modes. A default `Box3f` is empty. It has `extend`, `extend_point`,
  `contains`, `size`, `center` and `empty`.
- `exastitch.hilbert` converts between Hilbert-curve indices and coordinates
  in any number of dimensions with `hilbert_c2i` and `hilbert_i2c`. It also
  provides the bit interleaving helper `bit_transpose`. The product
  `n_dims * n_bits` must not exceed 64. Out-of-range input raises
  `ValueError`.
- `exastitch.gridlet` provides `Gridlet`, a dense block of vertex-centred
  scalars on one refinement level. `intersect_gridlet(pos, gridlet, scalars)`
  returns `(value, cell_id)` from trilinear interpolation. It returns `None`
  when the point is outside the gridlet or a neighbouring scalar is NaN.
- `exastitch.elements` locates points in unstructured elements and
  interpolates there, with `intersect_tet`, `intersect_pair`, `intersect_pyr`,
  `intersect_wedge` and `intersect_hex`. Vertices are `(x, y, z, value)`.
  Each function returns the interpolated value, or `None` when the point is
  outside. `intersect_indexed(kind, p, vertices, indices)` looks corners up in
  a shared vertex list, for kind `"tet"`, `"pair"`, `"pyr"`, `"wedge"` or
  `"hex"`. The module also provides `Plane` and `make_plane`.
- `exastitch.trianglemesh` reads and writes a binary triangle-mesh format. A
  file holds a sequence of records. Each record is an int32 vertex count,
  float32 xyz triples, an int32 triangle count and int32 index triples, all
  little endian. The module provides `load(file_name)`, `load_one(stream)`,
  `TriangleMesh` (with `bounds()` and `to_bytes()`) and `MeshFormatError`,
  which is raised for truncated data or out-of-range indices.
- `exastitch.lightinteractor` provides `Mat4`, a column-major 4×4 matrix
  with `identity`, `scale`, `inverse`, `transform` and `@`. It also provides
  `project` / `unproject`, which follow gluProject / gluUnProject. Its
  `LightInteractor` keeps a light position that `mouse_drag_left` moves under
  the cursor at constant depth. Callbacks registered with `connect` receive
  each new position.
- `exastitch.camera` provides a perspective `Camera`. `commit(position,
  direction, up, fovy, aspect)` recomputes the image plane.
  `apply(fb_size)` returns a `CameraFrame` (`org`, `dir_00`, `dir_du`,
  `dir_dv`) with per-pixel steps. `create_camera("perspective")` creates one.
  Other subtypes raise `ValueError`.
- `exastitch.launchparams` holds the per-frame parameter set: `LaunchParams`,
  `TransferFunction` (with `effective_domain()`), `ClipPlane`, `LightSource`
  and `IntegratorType`. It reports memory use with `MemoryStats` (`total()`,
  `report()`) and `pretty_bytes`. Its remaining helpers are
  `opacity_scale_factor`, `shade_modes`, `light_space_scale` and
  `load_majorants`. `load_majorants` reads a uint64 count followed by records
  of six float32 box coordinates and one float32 opacity.
- `exastitch.renderer` provides `RenderState`, which keeps a `LaunchParams`
  consistent as settings change. It restarts accumulation whenever a change
  invalidates the image. `next_frame()` returns a copy of the parameters and
  advances the accumulation counter. An optional `majorant_updater` callable
  recomputes maximum opacities when the colour map or value range changes.
  Own majorants passed in take precedence.

## What this package does not do

The package does not trace rays, run GPU kernels or draw anything. It has no
loaders for AMR or unstructured volume models, no interactive viewer and no
command-line tool. `RenderState.next_frame()` produces the parameters for a
frame, and rendering that frame is left to the caller.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Examples

```python
from exastitch.hilbert import hilbert_c2i, hilbert_i2c

index = hilbert_c2i(3, 4, [1, 2, 3])
assert hilbert_i2c(3, 4, index) == (1, 2, 3)
```

```python
from exastitch.trianglemesh import load

for mesh in load("meshes.tri"):
    print(len(mesh.vertex), "vertices;", mesh.bounds())
```

```python
from exastitch.camera import create_camera
from exastitch.renderer import RenderState

camera = create_camera("perspective")
camera.commit(position=(0, 0, -5), direction=(0, 0, 1), up=(0, 1, 0))
frame = camera.apply((640, 480))

state = RenderState()
state.resize((640, 480))
state.set_camera(*frame)
params = state.next_frame()
```