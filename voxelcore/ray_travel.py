"""Walk the unit grid cells crossed by a ray."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

IVec3 = Tuple[int, int, int]
Vec3 = Tuple[float, float, float]

_UNITS: Tuple[IVec3, IVec3, IVec3] = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


@dataclass
class _AxisTraveler:
    next: float
    step: float
    dir: IVec3


@dataclass(frozen=True)
class Step:
    """One crossing of a cell boundary.

    ``dir`` is the unit move, ``from_`` and ``to`` the cells on either side,
    ``at`` the crossing point and ``time`` the distance along the ray.
    """

    dir: IVec3
    from_: IVec3
    to: IVec3
    at: Vec3
    time: float


class RayTraveler:
    """Iterator over the cell boundaries a ray crosses up to ``limit``.

    ``ray`` is expected to be of unit length, so that times are distances.
    """

    def __init__(self, origin: Sequence[float], ray: Sequence[float], limit: float):
        self._travelers: List[_AxisTraveler] = []
        for start, component, unit in zip(origin, ray, _UNITS):
            if math.isnan(component) or component == 0.0:
                continue
            speed = abs(component)
            if component < 0.0:
                first = (start - math.floor(start)) / speed
                direction = (-unit[0], -unit[1], -unit[2])
            else:
                first = (math.floor(start + 1.0) - start) / speed
                direction = unit
            self._travelers.append(_AxisTraveler(first, 1.0 / speed, direction))
        self._time = 0.0
        self._limit = limit
        self._origin: Vec3 = (origin[0], origin[1], origin[2])
        self._ray: Vec3 = (ray[0], ray[1], ray[2])
        self._at: IVec3 = (
            math.floor(origin[0]),
            math.floor(origin[1]),
            math.floor(origin[2]),
        )

    def __iter__(self) -> Iterator[Step]:
        return self

    def __next__(self) -> Step:
        if self._time > self._limit or not self._travelers:
            raise StopIteration
        traveler = min(self._travelers, key=lambda t: t.next)
        self._time = traveler.next
        if self._time > self._limit:
            raise StopIteration

        traveler.next += traveler.step
        current = self._at
        self._at = tuple(a + d for a, d in zip(current, traveler.dir))
        return Step(
            dir=traveler.dir,
            from_=current,
            to=self._at,
            at=tuple(o + r * self._time for o, r in zip(self._origin, self._ray)),
            time=self._time,
        )