"""Turning chunk blocks into textured triangle meshes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .spacial import Neighborhood, Side, Sides, axis_sides
from .terrain import CHUNK_WIDTH, ChunkBlocks, Terrain, neighborhood_has_block

IVec3 = Tuple[int, int, int]
Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

_FACE_POSITIONS: Sides[Tuple[Vec3, Vec3, Vec3, Vec3]] = Sides(
    x_pos=((1.0, 0.0, 0.0), (1.0, 0.0, 1.0), (1.0, 1.0, 0.0), (1.0, 1.0, 1.0)),
    x_neg=((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 1.0, 0.0), (0.0, 1.0, 1.0)),
    y_pos=((0.0, 1.0, 0.0), (0.0, 1.0, 1.0), (1.0, 1.0, 0.0), (1.0, 1.0, 1.0)),
    y_neg=((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0, 0.0), (1.0, 0.0, 1.0)),
    z_pos=((0.0, 0.0, 1.0), (0.0, 1.0, 1.0), (1.0, 0.0, 1.0), (1.0, 1.0, 1.0)),
    z_neg=((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)),
)

_FACE_UVS: Sides[Tuple[Vec2, Vec2, Vec2, Vec2]] = Sides(
    x_pos=((0.0, 1.0), (1.0, 1.0), (0.0, 0.0), (1.0, 0.0)),
    x_neg=((0.0, 1.0), (1.0, 1.0), (0.0, 0.0), (1.0, 0.0)),
    y_pos=((0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)),
    y_neg=((0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)),
    z_pos=((1.0, 1.0), (1.0, 0.0), (0.0, 1.0), (0.0, 0.0)),
    z_neg=((1.0, 1.0), (1.0, 0.0), (0.0, 1.0), (0.0, 0.0)),
)

_FACE_INDICES: Sides[Tuple[int, ...]] = Sides(
    x_pos=(0, 2, 1, 1, 2, 3),
    x_neg=(0, 1, 2, 1, 3, 2),
    y_pos=(0, 1, 2, 1, 3, 2),
    y_neg=(0, 2, 1, 1, 2, 3),
    z_pos=(0, 2, 1, 1, 2, 3),
    z_neg=(0, 1, 2, 1, 3, 2),
)

_FACE_NORMALS: Sides[Vec3] = axis_sides().map(
    lambda axis: (float(axis[0]), float(axis[1]), float(axis[2]))
)


@dataclass
class ChunkMesh:
    """Vertex attributes and triangle indices of a chunk, four vertices per face."""

    positions: List[Vec3] = field(default_factory=list)
    normals: List[Vec3] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    texture_uvs: List[Vec2] = field(default_factory=list)
    texture_indices: List[int] = field(default_factory=list)

    def add_cube(
        self, offset: Sequence[float], visible: Sides[bool], textures: Sides[int]
    ) -> None:
        """Append the visible faces of a unit cube whose low corner is ``offset``."""
        ox, oy, oz = (float(value) for value in offset)
        for side in Side:
            if not visible[side]:
                continue
            base = len(self.positions)
            self.positions.extend((x + ox, y + oy, z + oz) for x, y, z in _FACE_POSITIONS[side])
            self.normals.extend([_FACE_NORMALS[side]] * 4)
            self.indices.extend(base + vertex for vertex in _FACE_INDICES[side])
            self.texture_uvs.extend(_FACE_UVS[side])
            self.texture_indices.extend([textures[side]] * 4)

    def validate(self) -> None:
        """Raise ``ValueError`` unless the attribute lists describe whole faces."""
        count = len(self.positions)
        for name, values in (
            ("normals", self.normals),
            ("texture_uvs", self.texture_uvs),
            ("texture_indices", self.texture_indices),
        ):
            if len(values) != count:
                raise ValueError(f"{name} has {len(values)} entries for {count} positions")
        if len(self.indices) % 6 != 0:
            raise ValueError(f"{len(self.indices)} indices do not form whole faces")
        if count % 4 != 0:
            raise ValueError(f"{count} positions do not form whole faces")
        if count // 4 != len(self.indices) // 6:
            raise ValueError("face count differs between positions and indices")


def _blocks_of(terrain: Terrain, coord: IVec3) -> Optional[ChunkBlocks]:
    chunk = terrain.chunks.get(coord)
    return None if chunk is None else chunk.blocks


def mesh_chunk(terrain: Terrain, chunk_coord: Sequence[int]) -> Optional[ChunkMesh]:
    """Mesh a chunk, or ``None`` while it or a neighbour has no blocks yet."""
    center = (chunk_coord[0], chunk_coord[1], chunk_coord[2])
    neighborhood = Neighborhood.around(center).try_map(lambda coord: _blocks_of(terrain, coord))
    if neighborhood is None:
        return None
    mesh = ChunkMesh()
    axes = axis_sides()
    for local, block in neighborhood.zero.blocks.items():
        textures = block.textures()
        if textures is None:
            continue
        if any(not 0 <= value < CHUNK_WIDTH for value in local):
            raise ValueError(f"block position {local} lies outside its chunk")
        visible = axes.map(
            lambda axis: not neighborhood_has_block(
                neighborhood, (local[0] + axis[0], local[1] + axis[1], local[2] + axis[2])
            )
        )
        mesh.add_cube(local, visible, textures)
    mesh.validate()
    return mesh


def mesh_pending(terrain: Terrain) -> List[IVec3]:
    """Mesh every chunk flagged for reload that can be meshed; return their coordinates."""
    meshed: List[IVec3] = []
    for chunk in terrain.chunks.values():
        if not chunk.mesh_reload:
            continue
        mesh = mesh_chunk(terrain, chunk.coord)
        if mesh is None:
            continue
        chunk.mesh = mesh
        chunk.mesh_reload = False
        meshed.append(chunk.coord)
    return meshed