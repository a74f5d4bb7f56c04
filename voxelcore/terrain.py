"""Chunked voxel terrain: block storage, loading zones and edit queue."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
)

from . import octahedron
from .spacial import Neighborhood, Sides, axis_sides

IVec3 = Tuple[int, int, int]
Vec3 = Tuple[float, float, float]

CHUNK_WIDTH = 32


class Block(Enum):
    """Kind of a voxel."""

    AIR = "air"
    GRASS = "grass"
    STONE = "stone"
    DIRT = "dirt"
    SAND = "sand"

    def textures(self) -> Optional[Sides[int]]:
        """Texture atlas layer for each face, or ``None`` for air."""
        return _TEXTURES.get(self)


def _uniform(layer: int) -> Sides[int]:
    return Sides(layer, layer, layer, layer, layer, layer)


# Atlas layers: 0 stone, 1 dirt, 2 grass side, 3 grass top, 4 sand.
_TEXTURES: Dict[Block, Sides[int]] = {
    Block.GRASS: Sides(x_pos=2, x_neg=2, y_pos=3, y_neg=1, z_pos=2, z_neg=2),
    Block.STONE: _uniform(0),
    Block.DIRT: _uniform(1),
    Block.SAND: _uniform(4),
}


class ModifyKind(Enum):
    """What a terrain edit does."""

    REMOVE = "remove"
    PLACE = "place"


@dataclass(frozen=True)
class Modify:
    """A queued edit of the block at a global position."""

    kind: ModifyKind
    at: IVec3


def _add(a: Sequence[int], b: Sequence[int]) -> IVec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def chunk_center(chunk: Sequence[int]) -> Vec3:
    """Centre of a chunk in world coordinates."""
    half = CHUNK_WIDTH / 2.0
    return (
        float(CHUNK_WIDTH * chunk[0]) + half,
        float(CHUNK_WIDTH * chunk[1]) + half,
        float(CHUNK_WIDTH * chunk[2]) + half,
    )


def local_to_global(chunk: Sequence[int], local: Sequence[int]) -> IVec3:
    """Global block position of ``local`` inside ``chunk``."""
    return (
        chunk[0] * CHUNK_WIDTH + local[0],
        chunk[1] * CHUNK_WIDTH + local[1],
        chunk[2] * CHUNK_WIDTH + local[2],
    )


def global_to_local(global_pos: Sequence[int]) -> Tuple[IVec3, IVec3]:
    """Split a global block position into chunk coordinates and local offset."""
    pairs = [divmod(value, CHUNK_WIDTH) for value in global_pos]
    chunk = (pairs[0][0], pairs[1][0], pairs[2][0])
    local = (pairs[0][1], pairs[1][1], pairs[2][1])
    return chunk, local


class LoadZone(Enum):
    """Area around a loader; the value is the zone's dependency level.

    A chunk in the mesh zone is always in the blocks zone too.
    """

    BLOCKS = 1
    MESH = 0

    def reach(self) -> float:
        """Radius of the octahedron this zone adds around a chunk centre."""
        return (CHUNK_WIDTH * self.value) * 1.05

    def distance(self, chunk: Sequence[int], point: Sequence[float]) -> float:
        """Distance from ``point`` to this zone around ``chunk``."""
        return octahedron.distance(chunk_center(chunk), self.reach(), point)


class TerrainLoader:
    """Something that causes the terrain around its position to be loaded."""

    def __init__(self, radius: float, buffer: float):
        if not radius > 1.0:
            raise ValueError(f"loader radius must exceed 1, got {radius}")
        if not buffer > 1.0:
            raise ValueError(f"loader buffer must exceed 1, got {buffer}")
        self.radius = radius
        self.buffer = buffer

    def __repr__(self) -> str:
        return f"TerrainLoader(radius={self.radius!r}, buffer={self.buffer!r})"

    def chunk_range(self) -> range:
        """Chunk offsets, on each axis, that this loader indexes."""
        reach = int(self.radius / CHUNK_WIDTH) + 2
        return range(-reach, reach + 1)

    def inside(self, zone: LoadZone, chunk: Sequence[int], position: Sequence[float]) -> bool:
        """Whether ``chunk`` is within this loader's radius for ``zone``."""
        return zone.distance(chunk, position) <= self.radius

    def inside_priority(
        self, zone: LoadZone, chunk: Sequence[int], position: Sequence[float]
    ) -> Optional[int]:
        """The truncated distance when inside, lower meaning more urgent."""
        dist = zone.distance(chunk, position)
        if dist <= self.radius:
            return int(dist)
        return None

    def outside(self, zone: LoadZone, chunk: Sequence[int], position: Sequence[float]) -> bool:
        """Whether ``chunk`` is beyond the radius plus the hysteresis buffer."""
        return zone.distance(chunk, position) > self.radius + self.buffer


@dataclass
class ChunkBlocks:
    """The solid blocks of one chunk, keyed by local position."""

    blocks: Dict[IVec3, Block] = field(default_factory=dict)

    def get(self, local: Sequence[int]) -> bool:
        """Whether a solid block is at ``local``."""
        return tuple(local) in self.blocks

    def remove(self, local: Sequence[int]) -> None:
        """Remove the block at ``local``, if any."""
        self.blocks.pop(tuple(local), None)

    def place(self, local: Sequence[int], block: Block) -> None:
        """Set the block at ``local``; air clears it."""
        key = tuple(local)
        if block is Block.AIR:
            self.blocks.pop(key, None)
        else:
            self.blocks[key] = block


@dataclass(eq=False)
class Chunk:
    """A chunk known to the terrain index and its loading state."""

    coord: IVec3
    blocks: Optional[ChunkBlocks] = None
    mesh: Optional[Any] = None
    mesh_reload: bool = False


class _BlockGenerator(Protocol):
    def generate(self, chunk: IVec3) -> Mapping[IVec3, Block]: ...


Loaders = Iterable[Tuple[Sequence[float], TerrainLoader]]


def neighborhood_has_block(
    neighborhood: Neighborhood[ChunkBlocks], relative: Sequence[int]
) -> bool:
    """Look up a block relative to the centre chunk, reaching one cell into neighbours."""
    x, y, z = relative
    width = CHUNK_WIDTH
    if x == -1:
        blocks, at = neighborhood.x_neg, (width - 1, y, z)
    elif y == -1:
        blocks, at = neighborhood.y_neg, (x, width - 1, z)
    elif z == -1:
        blocks, at = neighborhood.z_neg, (x, y, width - 1)
    elif x == width:
        blocks, at = neighborhood.x_pos, (0, y, z)
    elif y == width:
        blocks, at = neighborhood.y_pos, (x, 0, z)
    elif z == width:
        blocks, at = neighborhood.z_pos, (x, y, 0)
    else:
        blocks, at = neighborhood.zero, (x, y, z)
    if any(not 0 <= value < width for value in at):
        raise ValueError(f"position {tuple(relative)} is out of the neighbourhood")
    return blocks.get(at)


class Terrain:
    """All indexed chunks, the generator that fills them and pending edits."""

    def __init__(self, generator: _BlockGenerator):
        self.generator = generator
        self.chunks: Dict[IVec3, Chunk] = {}
        self.modifications: List[Modify] = []

    def global_to_local(self, global_pos: Sequence[int]) -> Optional[Tuple[Chunk, IVec3]]:
        """The indexed chunk holding ``global_pos`` and the local offset in it."""
        coord, local = global_to_local(global_pos)
        chunk = self.chunks.get(coord)
        if chunk is None:
            return None
        return chunk, local

    def has_block(self, global_pos: Sequence[int]) -> bool:
        """Whether a loaded solid block is at ``global_pos``."""
        found = self.global_to_local(global_pos)
        if found is None:
            return False
        chunk, local = found
        return chunk.blocks is not None and chunk.blocks.get(local)

    def push(self, modify: Modify) -> None:
        """Queue an edit for the next :meth:`apply_modifications`."""
        self.modifications.append(modify)

    def index_chunks(self, loaders: Loaders) -> None:
        """Index every chunk within the range of each loader."""
        for position, loader in loaders:
            center, _ = global_to_local(tuple(int(value) for value in position))
            span = loader.chunk_range()
            for offset in itertools.product(span, span, span):
                coord = _add(center, offset)
                if coord not in self.chunks:
                    self.chunks[coord] = Chunk(coord)

    def unload_meshes(self, loaders: Loaders) -> None:
        """Drop the meshes of chunks that every loader has left behind."""
        loaders = list(loaders)
        for chunk in self.chunks.values():
            if chunk.mesh is None:
                continue
            if all(
                loader.outside(LoadZone.MESH, chunk.coord, position)
                for position, loader in loaders
            ):
                chunk.mesh = None

    def generate_next(self, loaders: Loaders) -> Optional[IVec3]:
        """Generate the blocks of the most urgent chunk; return its coordinates."""
        loaders = list(loaders)

        def priority(coord: IVec3) -> Optional[int]:
            values = [
                p
                for position, loader in loaders
                if (p := loader.inside_priority(LoadZone.BLOCKS, coord, position)) is not None
            ]
            return min(values) if values else None

        candidates = [
            (chunk, p)
            for chunk in self.chunks.values()
            if chunk.blocks is None and (p := priority(chunk.coord)) is not None
        ]
        if not candidates:
            return None
        chunk, _ = min(candidates, key=lambda item: item[1])
        chunk.blocks = ChunkBlocks(dict(self.generator.generate(chunk.coord)))
        return chunk.coord

    def mark_need_mesh(self, loaders: Loaders) -> List[IVec3]:
        """Flag unmeshed chunks in a mesh zone whose whole neighbourhood has blocks."""
        loaders = list(loaders)
        marked: List[IVec3] = []
        for chunk in self.chunks.values():
            if chunk.mesh is not None:
                continue
            if not any(
                loader.inside(LoadZone.MESH, chunk.coord, position)
                for position, loader in loaders
            ):
                continue
            neighborhood = Neighborhood.around(chunk.coord).try_map(self.chunks.get)
            if neighborhood is None:
                continue
            if neighborhood.all(lambda neighbour: neighbour.blocks is not None):
                chunk.mesh_reload = True
                marked.append(chunk.coord)
        return marked

    def apply_modifications(self) -> None:
        """Apply and clear the queued edits, flagging affected chunks for remeshing."""
        queue, self.modifications = self.modifications, []
        for modify in queue:
            found = self.global_to_local(modify.at)
            if found is None:
                continue
            chunk, local = found
            if chunk.blocks is None:
                continue
            present = chunk.blocks.get(local)
            if modify.kind is ModifyKind.REMOVE:
                if not present:
                    continue
                chunk.blocks.remove(local)
            else:
                if present:
                    continue
                chunk.blocks.place(local, Block.STONE)
            self._flag_neighbours(modify.at, chunk)
            chunk.mesh_reload = True

    def _flag_neighbours(self, at: IVec3, chunk: Chunk) -> None:
        for offset in axis_sides():
            found = self.global_to_local(_add(at, offset))
            if found is None:
                continue
            neighbour, local = found
            if neighbour is chunk:
                continue
            if neighbour.blocks is None or not neighbour.blocks.get(local):
                continue
            neighbour.mesh_reload = True

    def remove_meshes(self) -> None:
        """Drop every chunk mesh."""
        for chunk in self.chunks.values():
            chunk.mesh = None

    def reload_generator(self, generator: _BlockGenerator) -> None:
        """Switch generator and discard all generated blocks and meshes."""
        self.generator = generator
        for chunk in self.chunks.values():
            chunk.blocks = None
            chunk.mesh = None