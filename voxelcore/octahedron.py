"""Distance from a point to a solid regular octahedron (an L1 ball)."""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]


class Zone(Enum):
    """Region of the positive octant that decides the nearest surface feature."""

    PILLAR = "pillar"
    PYRAMID_X = "pyramid_x"
    PYRAMID_Y = "pyramid_y"
    PYRAMID_Z = "pyramid_z"
    CORNER_X = "corner_x"
    CORNER_Y = "corner_y"
    CORNER_Z = "corner_z"


def zone(point: Sequence[float]) -> Zone:
    """Classify a point with non-negative components against the unit octahedron.

    Pillar points project onto the face, corner points onto an edge, and
    pyramid points onto a vertex.
    """
    x, y, z = point
    if x < 0.0 or y < 0.0 or z < 0.0:
        raise ValueError(f"point must have non-negative components: {tuple(point)}")
    a = x + y - z * 2.0
    b = y + z - x * 2.0
    c = z + x - y * 2.0
    d = x - y
    e = y - z
    f = z - x
    if a <= 1.0 and b <= 1.0 and c <= 1.0:
        return Zone.PILLAR
    if a >= 1.0 and -1.0 <= d <= 1.0:
        return Zone.CORNER_Z
    if b >= 1.0 and -1.0 <= e <= 1.0:
        return Zone.CORNER_X
    if c >= 1.0 and -1.0 <= f <= 1.0:
        return Zone.CORNER_Y
    if d <= -1.0 and e >= 1.0:
        return Zone.PYRAMID_Y
    if e <= -1.0 and f >= 1.0:
        return Zone.PYRAMID_Z
    if d >= 1.0 and f <= -1.0:
        return Zone.PYRAMID_X
    raise ValueError(f"point falls in no zone: {tuple(point)}")


def _nearest(point: Vec3) -> Vec3:
    x, y, z = point
    kind = zone(point)
    if kind is Zone.PILLAR:
        shift = (x + y + z - 1.0) / 3.0
        return (x - shift, y - shift, z - shift)
    if kind is Zone.PYRAMID_X:
        return (1.0, 0.0, 0.0)
    if kind is Zone.PYRAMID_Y:
        return (0.0, 1.0, 0.0)
    if kind is Zone.PYRAMID_Z:
        return (0.0, 0.0, 1.0)
    if kind is Zone.CORNER_X:
        shift = (y + z - 1.0) / 2.0
        return (0.0, y - shift, z - shift)
    if kind is Zone.CORNER_Y:
        shift = (x + z - 1.0) / 2.0
        return (x - shift, 0.0, z - shift)
    shift = (x + y - 1.0) / 2.0
    return (x - shift, y - shift, 0.0)


def distance(center: Sequence[float], radius: float, point: Sequence[float]) -> float:
    """Distance from ``point`` to the octahedron of ``radius`` around ``center``.

    Points inside are at distance zero. A non-positive radius degenerates the
    octahedron to its centre.
    """
    if radius > 0.0:
        scaled = tuple(abs((p - c) / radius) for p, c in zip(point, center))
        if sum(scaled) <= 1.0:
            return 0.0
        return math.dist(scaled, _nearest(scaled)) * radius
    return math.dist(point, center)