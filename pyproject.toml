[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exastitch"
version = "0.1.0"
description = "Host-side building blocks for AMR and unstructured volume rendering: Hilbert curves, gridlet and element sampling, triangle meshes, cameras and render state"
requires-python = ">=3.10"
dependencies = []
keywords = ["volume rendering", "AMR", "unstructured mesh", "hilbert curve", "visualization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["exastitch"]

[tool.pytest.ini_options]
addopts = "-ra"
