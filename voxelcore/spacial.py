"""The six faces of a cube and a cell with its six neighbours."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")

IVec3 = Tuple[int, int, int]


class Side(Enum):
    """A face of a cube, in the fixed order used everywhere."""

    X_POS = "x_pos"
    X_NEG = "x_neg"
    Y_POS = "y_pos"
    Y_NEG = "y_neg"
    Z_POS = "z_pos"
    Z_NEG = "z_neg"


@dataclass(frozen=True)
class Sides(Generic[T]):
    """One value for each face of a cube."""

    x_pos: T
    x_neg: T
    y_pos: T
    y_neg: T
    z_pos: T
    z_neg: T

    def map(self, f: Callable[[T], U]) -> "Sides[U]":
        """Apply ``f`` to every face value, in side order."""
        return Sides(*(f(value) for value in self))

    def __getitem__(self, side: Side) -> T:
        return getattr(self, side.value)

    def __iter__(self) -> Iterator[T]:
        for side in Side:
            yield self[side]


def axis_sides() -> Sides[IVec3]:
    """The unit vector pointing out of each face."""
    return Sides(
        x_pos=(1, 0, 0),
        x_neg=(-1, 0, 0),
        y_pos=(0, 1, 0),
        y_neg=(0, -1, 0),
        z_pos=(0, 0, 1),
        z_neg=(0, 0, -1),
    )


def _add(a: IVec3, b: IVec3) -> IVec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


@dataclass(frozen=True)
class Neighborhood(Generic[T]):
    """A centre value and the values of its six face neighbours."""

    zero: T
    x_pos: T
    x_neg: T
    y_pos: T
    y_neg: T
    z_pos: T
    z_neg: T

    @classmethod
    def around(cls, center: IVec3) -> "Neighborhood[IVec3]":
        """The integer coordinates of ``center`` and of its six neighbours."""
        axes = axis_sides()
        return cls(center, *(_add(center, offset) for offset in axes))

    def as_tuple(self) -> Tuple[T, T, T, T, T, T, T]:
        """All seven values, centre first, then sides in side order."""
        return (
            self.zero,
            self.x_pos,
            self.x_neg,
            self.y_pos,
            self.y_neg,
            self.z_pos,
            self.z_neg,
        )

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """Whether ``predicate`` holds for all seven values."""
        return all(predicate(value) for value in self.as_tuple())

    def try_map(self, f: Callable[[T], Optional[U]]) -> Optional["Neighborhood[U]"]:
        """Map every value with ``f``; ``None`` as soon as ``f`` gives ``None``."""
        mapped = []
        for value in self.as_tuple():
            result = f(value)
            if result is None:
                return None
            mapped.append(result)
        return Neighborhood(*mapped)