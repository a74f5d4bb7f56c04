[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelcore"
version = "0.1.0"
description = "Voxel world core: chunked block terrain, noise generation, ray traversal, face-culled meshing and box collision"
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "terrain", "chunks", "raycast", "physics", "meshing", "procedural-generation", "simplex-noise"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxelcore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
