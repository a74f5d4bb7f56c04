import math

import pytest

from voxelcore.controller import ControllerState, CursorState, Key, cursor_for_focus


def _length(vec):
    return math.sqrt(sum(c * c for c in vec))


def test_no_keys_means_no_movement():
    state = ControllerState()
    state.update_keyboard([])
    assert state.linear_2d == (0.0, 0.0, 0.0)
    assert state.linear_3d == (0.0, 0.0, 0.0)
    assert (state.jump, state.sneak, state.sprint) == (False, False, False)


@pytest.mark.parametrize(
    "key, expected",
    [
        (Key.E, (0.0, 0.0, -1.0)),
        (Key.D, (0.0, 0.0, 1.0)),
        (Key.F, (1.0, 0.0, 0.0)),
        (Key.S, (-1.0, 0.0, 0.0)),
    ],
)
def test_single_direction(key, expected):
    state = ControllerState()
    state.update_keyboard([key])
    assert state.linear_2d == expected
    assert state.linear_3d == expected


def test_opposite_keys_cancel():
    state = ControllerState()
    state.update_keyboard([Key.E, Key.D])
    assert state.linear_2d == (0.0, 0.0, 0.0)


def test_diagonal_is_normalized():
    state = ControllerState()
    state.update_keyboard([Key.E, Key.F])
    assert _length(state.linear_2d) == pytest.approx(1.0)
    assert state.linear_2d[0] == pytest.approx(-state.linear_2d[2])
    assert state.linear_2d[1] == 0.0


def test_jump_moves_only_in_3d():
    state = ControllerState()
    state.update_keyboard({Key.SPACE})
    assert state.jump is True
    assert state.linear_2d == (0.0, 0.0, 0.0)
    assert state.linear_3d == (0.0, 1.0, 0.0)


def test_jump_and_sneak_cancel():
    state = ControllerState()
    state.update_keyboard([Key.SPACE, Key.Z])
    assert state.jump is True
    assert state.sneak is True
    assert state.linear_3d == (0.0, 0.0, 0.0)


def test_jump_with_forward_is_unit_length():
    state = ControllerState()
    state.update_keyboard([Key.SPACE, Key.E])
    assert _length(state.linear_3d) == pytest.approx(1.0)
    assert state.linear_3d[1] > 0.0
    assert state.linear_2d == (0.0, 0.0, -1.0)


def test_sprint_key():
    state = ControllerState()
    state.update_keyboard([Key.A])
    assert state.sprint is True
    state.update_keyboard([])
    assert state.sprint is False


def test_mouse_deltas_are_summed():
    state = ControllerState()
    state.update_mouse([(1.0, 2.0), (3.0, -4.0)])
    assert state.mouse == (4.0, -2.0)


def test_mouse_without_events_is_zero():
    state = ControllerState(mouse=(5.0, 5.0))
    state.update_mouse([])
    assert state.mouse == (0.0, 0.0)


def test_cursor_focus():
    assert cursor_for_focus(True) == CursorState(locked=True, visible=False)
    assert cursor_for_focus(False) == CursorState(locked=False, visible=True)