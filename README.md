# voxelcore

The data side of a block-based voxel world, in pure Python with no dependencies.
Vectors are plain tuples: `(x, y, z)` floats for positions, `(x, y, z)` ints for
block and chunk coordinates.

| Module | What it holds |
|--------|---------------|
| `voxelcore.terrain` | `Terrain`, `Chunk`, `ChunkBlocks`, `Block`, `Modify`/`ModifyKind`, `TerrainLoader`, `LoadZone`; chunks are `CHUNK_WIDTH` = 32 blocks wide |
| `voxelcore.generation` | `TerrainGenerator` (height map from layered simplex noise), `simplex_noise_2d`, `harmonic_noise` |
| `voxelcore.ray_travel` | `RayTraveler`, an iterator of `Step`s over the grid cells a ray crosses |
| `voxelcore.physics` | `Body`, `Collider`, `step`: gravity, horizontal damping, swept box collision and grounding |
| `voxelcore.render` | `ChunkMesh`, `mesh_chunk`, `mesh_pending`: face-culled meshes of chunks |
| `voxelcore.controller` | `Key`, `ControllerState`, `cursor_for_focus` |
| `voxelcore.game` | `Player`, `Game`, `pointed_block`, `block_action`, `inspect_lines` |
| `voxelcore.octahedron` | distance from a point to an octahedron, used for loading zones |
| `voxelcore.spacial`, `voxelcore.swizzle` | cube faces/neighbourhoods and per-axis vector helpers |

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Generation parameters

`TerrainGenerator` takes two lists of `(frequency, amplitude)` pairs. Build it from a
dictionary with `TerrainGenerator.from_dict`, or from a JSON file with
`TerrainGenerator.from_file`:

```json
{
  "bedrock_harmonics": [[20.0, 0.5], [100.0, 4.0], [1000.0, 16.0]],
  "relief_harmonics": [[50.0, 1.0], [80.0, 1.0]]
}
```

A missing key or a malformed pair raises `ValueError`. `generate(chunk)` returns the
solid blocks of a chunk keyed by local position: stone below the surface, then three
layers of dirt topped with grass, or sand where the surface lies below height 2.

## Running the world

```python
from voxelcore.game import Game
from voxelcore.generation import TerrainGenerator

generator = TerrainGenerator.from_dict({
    "bedrock_harmonics": [[20.0, 0.5], [100.0, 4.0], [1000.0, 16.0]],
    "relief_harmonics": [[50.0, 1.0], [80.0, 1.0]],
})
game = Game(generator)

# One frame of 1/60 s: no keys held, none just pressed, no mouse motion, no clicks.
game.update(1 / 60, set(), set(), [], set())
```

`Game.update(dt, pressed, just_pressed, mouse_deltas, mouse_just_pressed)` takes the
held keys and the keys pressed this frame as `Key` members, the mouse motion events of
the frame as `(dx, dy)` pairs, and the mouse buttons clicked this frame as `"left"` and
`"right"`. Each frame it:

1. reads the input into `game.controller`;
2. moves the player, flying or by pushing its physical body, and turns its view;
3. runs `physics.step` on the player's body when it is not flying;
4. indexes the chunks around the player, drops meshes of chunks left far behind,
   generates the blocks of at most one chunk (the nearest one waiting) and flags chunks
   ready for meshing;
5. finds the block the player points at within 16 blocks (`game.pointed`), turns a
   click into an edit, applies the queued edits and meshes flagged chunks.

Afterwards the state is plain data: `game.player.position`, `game.player.yaw` and
`game.player.pitch`, and `game.terrain.chunks`, a dict from chunk coordinates to
`Chunk` objects with `blocks` (a `ChunkBlocks` or `None`) and `mesh` (a `ChunkMesh` or
`None`). A `ChunkMesh` has `positions`, `normals`, `texture_uvs`, `texture_indices`
(four vertices per visible face) and `indices` (six per face). Texture indices are atlas
layers: 0 stone, 1 dirt, 2 grass side, 3 grass top, 4 sand.

The player starts flying. If a moving body ends up inside a block, the tunnelling is
logged as a warning on the `voxelcore.physics` logger and the body loses its velocity,
which puts the player into flying mode.

## Controls

| Input | Action |
|-------|--------|
| E / D | forward / back |
| S / F | left / right |
| Space | jump, or fly up |
| Z | fly down |
| A | sprint |
| V | toggle flying |
| U | drop all chunk meshes (they are rebuilt as chunks get flagged again) |
| I | discard all generated blocks and meshes and regenerate; reads the generator from `game.generator_path` when it is set |
| left click | remove the pointed block |
| right click | place a stone block against the pointed face |
| mouse motion | turn the view; pitch is clamped to straight up and straight down |

## Lower-level pieces

Walk a ray through the grid:

```python
from voxelcore.ray_travel import RayTraveler

for step in RayTraveler((0.5, 0.5, 0.5), (1.0, 0.0, 0.0), 3.0):
    print(step.from_, step.to, step.time)
```

Use a terrain and physics without `Game`:

```python
from voxelcore import physics
from voxelcore.physics import Body, Collider
from voxelcore.terrain import Terrain

terrain = Terrain(generator)
body = Body(position=(0.0, 40.0, 0.0),
            collider=Collider(size=(0.8, 1.9, 0.8), anchor=(0.4, 1.7, 0.4)))
physics.step(body, terrain, 1 / 60)
```

Only chunks present in `terrain.chunks` with generated blocks count as solid.

## What it does not do

There is no window, no drawing, no input capture and no command to start. Feeding
keys and mouse events to `Game.update`, loading the texture atlas and uploading the
`ChunkMesh` buffers to a GPU are left to the program that uses the package. The
terrain is kept in memory only; nothing is saved.