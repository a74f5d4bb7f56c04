"""Voxel world core: chunked terrain, noise generation, ray traversal, meshing and box physics."""

__version__ = "0.1.0"
__all__ = [
    "controller",
    "game",
    "generation",
    "octahedron",
    "physics",
    "ray_travel",
    "render",
    "spacial",
    "swizzle",
    "terrain",
]