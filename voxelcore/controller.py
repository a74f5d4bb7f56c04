"""Keyboard and mouse state turned into movement intentions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Tuple

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


class Key(Enum):
    """Keys the game reacts to."""

    SPACE = "space"
    Z = "z"
    A = "a"
    E = "e"
    D = "d"
    F = "f"
    S = "s"
    V = "v"
    U = "u"
    I = "i"  # noqa: E741


@dataclass(frozen=True)
class CursorState:
    """Whether the cursor is locked to the window and whether it is shown."""

    locked: bool
    visible: bool


def cursor_for_focus(focused: bool) -> CursorState:
    """Lock and hide the cursor while the window has focus, release it otherwise."""
    return CursorState(locked=focused, visible=not focused)


def _normalize_or_zero(vec: Sequence[float]) -> Vec3:
    length = math.sqrt(sum(c * c for c in vec))
    if not (math.isfinite(length) and length > 0.0):
        return (0.0, 0.0, 0.0)
    return (vec[0] / length, vec[1] / length, vec[2] / length)


@dataclass
class ControllerState:
    """The player's input for the current frame."""

    linear_3d: Vec3 = (0.0, 0.0, 0.0)
    linear_2d: Vec3 = (0.0, 0.0, 0.0)
    jump: bool = False
    sneak: bool = False
    sprint: bool = False
    mouse: Vec2 = (0.0, 0.0)

    def update_keyboard(self, pressed: Iterable[Key]) -> None:
        """Read the held keys into flags and unit movement directions."""
        held = set(pressed)
        self.jump = Key.SPACE in held
        self.sneak = Key.Z in held
        self.sprint = Key.A in held
        x = (Key.F in held) - (Key.S in held)
        z = (Key.D in held) - (Key.E in held)
        self.linear_2d = _normalize_or_zero((float(x), 0.0, float(z)))
        y = self.jump - self.sneak
        self.linear_3d = _normalize_or_zero((float(x), float(y), float(z)))

    def update_mouse(self, deltas: Iterable[Sequence[float]]) -> None:
        """Sum this frame's mouse motion events."""
        dx = dy = 0.0
        for delta_x, delta_y in deltas:
            dx += delta_x
            dy += delta_y
        self.mouse = (dx, dy)