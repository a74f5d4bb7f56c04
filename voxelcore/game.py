"""The player, what it points at, and the per-frame update of the whole world."""

from __future__ import annotations

import math
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from . import physics
from .controller import ControllerState, Key
from .generation import TerrainGenerator
from .physics import Body, Collider
from .ray_travel import RayTraveler
from .render import mesh_pending
from .terrain import Modify, ModifyKind, Terrain, TerrainLoader

Vec3 = Tuple[float, float, float]
IVec3 = Tuple[int, int, int]
Pointed = Tuple[IVec3, IVec3]

ROTATION_SENSITIVITY = 0.2
REACH = 16.0
FLYING_SPEED = 8.0
FLYING_SPRINT_SPEED = 40.0
GROUNDED_FORCE = 70.0
GROUNDED_SPRINT_FORCE = 100.0
AIRBORNE_FORCE = 40.0
JUMP_SPEED = 12.0

LEFT_BUTTON = "left"
RIGHT_BUTTON = "right"


def forward(yaw: float, pitch: float) -> Vec3:
    """Unit view direction for a yaw around Y and a pitch around X; (0, 0) looks down -Z."""
    cos_pitch = math.cos(pitch)
    return (-math.sin(yaw) * cos_pitch, math.sin(pitch), -math.cos(yaw) * cos_pitch)


def _rotate_yaw(yaw: float, vec: Sequence[float]) -> Vec3:
    x, y, z = vec
    cos_yaw, sin_yaw = math.cos(yaw), math.sin(yaw)
    return (x * cos_yaw + z * sin_yaw, y, -x * sin_yaw + z * cos_yaw)


def _look_angles(eye: Sequence[float], target: Sequence[float]) -> Tuple[float, float]:
    dx, dy, dz = (t - e for t, e in zip(target, eye))
    horizontal = math.hypot(dx, dz)
    return math.atan2(-dx, -dz), math.atan2(dy, horizontal)


def inspect_lines(position: Sequence[float]) -> List[str]:
    """The three lines of the coordinate overlay."""
    return [f"{axis}: {value:>+8.3f}" for axis, value in zip("xyz", position)]


def pointed_block(
    terrain: Terrain, position: Sequence[float], yaw: float, pitch: float
) -> Optional[Pointed]:
    """The first solid block within reach along the view, with the cell the ray came from."""
    for crossing in RayTraveler(position, forward(yaw, pitch), REACH):
        if terrain.has_block(crossing.to):
            return crossing.to, crossing.from_
    return None


def block_action(pointed: Optional[Pointed], left: bool, right: bool) -> Optional[Modify]:
    """The edit a click makes: left removes the pointed block, right places against it."""
    if pointed is None:
        return None
    at, before = pointed
    if left:
        return Modify(ModifyKind.REMOVE, at)
    if right:
        return Modify(ModifyKind.PLACE, before)
    return None


@dataclass
class Player:
    """The camera-carrying player: a physical body, a view orientation and a loader."""

    body: Body
    yaw: float
    pitch: float
    loader: TerrainLoader

    @property
    def position(self) -> Vec3:
        return self.body.position

    @property
    def flying(self) -> bool:
        return self.body.velocity is None

    def toggle_flying(self) -> None:
        """Switch between free flight and physics-driven movement."""
        self.body.velocity = (0.0, 0.0, 0.0) if self.flying else None

    def rotate(self, mouse: Sequence[float], dt: float) -> None:
        """Turn the view by this frame's mouse motion."""
        scale = ROTATION_SENSITIVITY * dt
        yaw = self.yaw - scale * mouse[0]
        pitch = self.pitch - scale * mouse[1]
        self.yaw = yaw % (2.0 * math.pi)
        self.pitch = min(max(pitch, -math.pi / 2.0), math.pi / 2.0)

    def move_flying(self, controller: ControllerState, dt: float) -> None:
        """Fly along the input direction, turned by the yaw only."""
        if not self.flying:
            return
        speed = FLYING_SPRINT_SPEED if controller.sprint else FLYING_SPEED
        shift = _rotate_yaw(self.yaw, controller.linear_3d)
        self.body.position = tuple(p + s * dt * speed for p, s in zip(self.body.position, shift))

    def move_physics(self, controller: ControllerState, dt: float) -> None:
        """Push the body horizontally and jump when standing on the ground."""
        if self.flying:
            return
        grounded = self.body.grounded
        if grounded:
            force = GROUNDED_SPRINT_FORCE if controller.sprint else GROUNDED_FORCE
        else:
            force = AIRBORNE_FORCE
        vx, vy, vz = self.body.velocity
        if grounded and controller.jump:
            vy = JUMP_SPEED
        push = _rotate_yaw(self.yaw, controller.linear_2d)
        self.body.velocity = (
            vx + push[0] * force * dt,
            vy + push[1] * force * dt,
            vz + push[2] * force * dt,
        )


def _spawn_player() -> Player:
    eye = (2.0, 18.0, 1.0)
    yaw, pitch = _look_angles(eye, (0.0, 18.0, 0.0))
    body = Body(
        position=eye,
        collider=Collider(size=(0.8, 1.9, 0.8), anchor=(0.4, 1.7, 0.4)),
        velocity=None,
    )
    return Player(body=body, yaw=yaw, pitch=pitch, loader=TerrainLoader(128.0, 20.0))


class Game:
    """The world state advanced one frame at a time from the input of that frame.

    When ``generator_path`` is set, the reload key reads the generator from it;
    otherwise the current generator is kept and the terrain regenerated.
    """

    def __init__(self, generator):
        self.terrain = Terrain(generator)
        self.controller = ControllerState()
        self.player = _spawn_player()
        self.pointed: Optional[Pointed] = None
        self.generator_path: Optional[Union[str, PathLike]] = None

    def _loaders(self):
        return [(self.player.position, self.player.loader)]

    def update(
        self,
        dt: float,
        pressed: Iterable[Key],
        just_pressed: Iterable[Key],
        mouse_deltas: Iterable[Sequence[float]],
        mouse_just_pressed: Iterable[str],
    ) -> None:
        """Advance one frame; mouse buttons are named ``"left"`` and ``"right"``."""
        just_pressed = set(just_pressed)
        clicks = set(mouse_just_pressed)

        self.controller.update_keyboard(pressed)
        self.controller.update_mouse(mouse_deltas)

        self.player.move_flying(self.controller, dt)
        self.player.move_physics(self.controller, dt)
        self.player.rotate(self.controller.mouse, dt)
        if not self.player.flying:
            physics.step(self.player.body, self.terrain, dt)

        loaders = self._loaders()
        self.terrain.index_chunks(loaders)
        self.terrain.unload_meshes(loaders)
        self.terrain.generate_next(loaders)
        self.terrain.mark_need_mesh(loaders)

        self.pointed = pointed_block(
            self.terrain, self.player.position, self.player.yaw, self.player.pitch
        )
        modify = block_action(self.pointed, LEFT_BUTTON in clicks, RIGHT_BUTTON in clicks)
        if modify is not None:
            self.terrain.push(modify)
        self.terrain.apply_modifications()
        mesh_pending(self.terrain)

        if Key.U in just_pressed:
            self.terrain.remove_meshes()
        if Key.I in just_pressed:
            if self.generator_path is not None:
                generator = TerrainGenerator.from_file(self.generator_path)
            else:
                generator = self.terrain.generator
            self.terrain.reload_generator(generator)
        if Key.V in just_pressed:
            self.player.toggle_flying()