"""Host-side building blocks for AMR and unstructured volume rendering.

Hilbert curves, gridlet and element sampling, triangle meshes, matrices,
cameras and render state.
"""

__version__ = "0.1.0"