"""Axis selection helpers for three-component vectors.

Vectors are plain 3-tuples. Code that must treat the X, Y and Z axes the same
way splits a vector into the component on one axis and the two others, works
on them, and composes the result back.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple, TypeVar

T = TypeVar("T")

Vec3 = Tuple[T, T, T]


class Dim3(Enum):
    """One of the three axes."""

    X = 0
    Y = 1
    Z = 2


class Swizzle3(Enum):
    """A permutation of the three components of a vector."""

    XYZ = (0, 1, 2)
    XZY = (0, 2, 1)
    YXZ = (1, 0, 2)
    YZX = (1, 2, 0)
    ZXY = (2, 0, 1)
    ZYX = (2, 1, 0)

    def apply(self, vec: Sequence[T]) -> Vec3:
        """Return the components of ``vec`` in this swizzle's order."""
        _check(vec)
        first, second, third = self.value
        return (vec[first], vec[second], vec[third])


def _check(vec: Sequence[T]) -> None:
    if len(vec) != 3:
        raise ValueError(f"expected a 3-component vector, got {len(vec)} components")


def split(vec: Sequence[T], dim: Dim3) -> Tuple[T, Tuple[T, T]]:
    """Split ``vec`` into its component on ``dim`` and the two others, in order."""
    _check(vec)
    others = tuple(value for index, value in enumerate(vec) if index != dim.value)
    return vec[dim.value], (others[0], others[1])


def compose(dim: Dim3, it: T, others: Sequence[T]) -> Vec3:
    """Inverse of :func:`split`: put ``it`` on ``dim`` and ``others`` around it."""
    if len(others) != 2:
        raise ValueError(f"expected 2 other components, got {len(others)}")
    components = list(others)
    components.insert(dim.value, it)
    return (components[0], components[1], components[2])


def get_component(vec: Sequence[T], dim: Dim3) -> T:
    """Return the component of ``vec`` on ``dim``."""
    _check(vec)
    return vec[dim.value]


def with_component(vec: Sequence[T], dim: Dim3, value: T) -> Vec3:
    """Return a copy of ``vec`` whose component on ``dim`` is ``value``."""
    _, others = split(vec, dim)
    return compose(dim, value, others)