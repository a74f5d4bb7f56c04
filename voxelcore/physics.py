"""Gravity, damping and swept box collision against the voxel terrain."""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .ray_travel import RayTraveler, Step
from .swizzle import Dim3, compose, get_component, split
from .terrain import Terrain

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
IVec3 = Tuple[int, int, int]

GRAVITY = 40.0
GROUNDED_DAMPING = 0.7
AIRBORNE_DAMPING = 0.9
_CLEARANCE = 1e-4

_AXIS_OF_STEP: Dict[IVec3, Dim3] = {
    (1, 0, 0): Dim3.X,
    (-1, 0, 0): Dim3.X,
    (0, 1, 0): Dim3.Y,
    (0, -1, 0): Dim3.Y,
    (0, 0, 1): Dim3.Z,
    (0, 0, -1): Dim3.Z,
}


@dataclass(frozen=True)
class Collider:
    """An axis-aligned box of ``size`` whose low corner is ``anchor`` below the position."""

    size: Vec3
    anchor: Vec3


@dataclass
class Body:
    """A collider in the world; without velocity it is not moved by physics."""

    position: Vec3
    collider: Collider
    velocity: Optional[Vec3] = (0.0, 0.0, 0.0)
    grounded: bool = False


def damp_velocity(body: Body, dt: float) -> None:
    """Slow the horizontal velocity, more strongly on the ground."""
    if body.velocity is None:
        return
    rate = GROUNDED_DAMPING if body.grounded else AIRBORNE_DAMPING
    factor = rate ** (dt + 1.0)
    vx, vy, vz = body.velocity
    body.velocity = (vx * factor, vy, vz * factor)


def apply_gravity(body: Body, dt: float) -> None:
    """Accelerate the body downwards."""
    if body.velocity is None:
        return
    vx, vy, vz = body.velocity
    body.velocity = (vx, vy - GRAVITY * dt, vz)


def _first_collision(
    terrain: Terrain,
    corner_active: Vec3,
    corner_select: Vec3,
    size: Vec3,
    direction: Vec3,
    length: float,
) -> Optional[Tuple[Dim3, Step]]:
    for step in RayTraveler(corner_active, direction, length):
        dim = _AXIS_OF_STEP[step.dir]
        low = tuple(at - select for at, select in zip(step.at, corner_select))
        _, (plane_u, plane_v) = split(low, dim)
        _, (size_u, size_v) = split(size, dim)
        across = get_component(step.to, dim)
        for u, v in itertools.product(
            range(math.floor(plane_u), math.floor(plane_u + size_u) + 1),
            range(math.floor(plane_v), math.floor(plane_v + size_v) + 1),
        ):
            if terrain.has_block(compose(dim, across, (u, v))):
                return dim, step
    return None


def apply_velocity(body: Body, terrain: Terrain, dt: float) -> None:
    """Move the body by its velocity, stopping each axis short of solid blocks.

    A blocked axis loses its velocity; being blocked from below grounds the body.
    A body that still ends up inside a block loses its velocity and stays put.
    """
    if body.velocity is None:
        return
    size = body.collider.size
    velocity = list(body.velocity)
    # The side of the box that leads the movement on each axis.
    corner_select: Vec3 = tuple(0.0 if v < 0.0 else s for v, s in zip(velocity, size))
    corner_active: Vec3 = tuple(
        p - a + c for p, a, c in zip(body.position, body.collider.anchor, corner_select)
    )
    shift = [v * dt for v in velocity]
    grounded = False

    while True:
        length = math.sqrt(sum(c * c for c in shift))
        if not (math.isfinite(length) and length > 0.0):
            break
        direction: Vec3 = tuple(c / length for c in shift)
        hit = _first_collision(terrain, corner_active, corner_select, size, direction, length)
        if hit is None:
            break
        dim, step = hit
        axis = dim.value
        shift[axis] *= step.time / length
        shift[axis] -= math.copysign(1.0, direction[axis]) * _CLEARANCE
        velocity[axis] = 0.0
        if step.dir == (0, -1, 0):
            grounded = True

    body.velocity = (velocity[0], velocity[1], velocity[2])
    body.grounded = grounded

    target = tuple(c + s for c, s in zip(corner_active, shift))
    if terrain.has_block(tuple(math.floor(c) for c in target)):
        logger.warning(
            "collider tunneling: pos %s, shift %s, pos* %s", corner_active, tuple(shift), target
        )
        body.velocity = None
        return

    body.position = tuple(p + s for p, s in zip(body.position, shift))


def step(body: Body, terrain: Terrain, dt: float) -> None:
    """One physics tick: gravity, then damping, then movement."""
    apply_gravity(body, dt)
    damp_velocity(body, dt)
    apply_velocity(body, terrain, dt)