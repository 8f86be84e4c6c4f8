from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.morph_state import MorphState
from engine.core.rotation import (
    ClockRotation,
    RotationTable,
    TableRotation,
    make_rotation_source,
    quaternion_from_yaw_pitch_roll,
    quaternion_to_matrix,
    rotate_points,
    rotation_matrix,
)


def _rx(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]], dtype=float)


def _ry(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]], dtype=float)


def _rz(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]], dtype=float)


def test_phase_zero_is_exact_identity() -> None:
    np.testing.assert_array_equal(rotation_matrix(0.0), np.eye(3))


@pytest.mark.parametrize("phase", [0.1, 1.0, 2.5, 5.9])
def test_rotation_matrix_is_orthonormal(phase: float) -> None:
    m = rotation_matrix(phase)
    np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(m) == pytest.approx(1.0)


def test_yaw_rotates_about_y() -> None:
    m = quaternion_to_matrix(quaternion_from_yaw_pitch_roll(math.pi / 2, 0.0, 0.0))
    np.testing.assert_allclose(m @ [1.0, 0.0, 0.0], [0.0, 0.0, -1.0], atol=1e-12)


def test_pitch_rotates_about_x() -> None:
    m = quaternion_to_matrix(quaternion_from_yaw_pitch_roll(0.0, math.pi / 2, 0.0))
    np.testing.assert_allclose(m @ [0.0, 1.0, 0.0], [0.0, 0.0, 1.0], atol=1e-12)


def test_roll_rotates_about_z() -> None:
    m = quaternion_to_matrix(quaternion_from_yaw_pitch_roll(0.0, 0.0, math.pi / 2))
    np.testing.assert_allclose(m @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], atol=1e-12)


@pytest.mark.parametrize("phase", [0.3, 1.7, 4.2])
def test_composition_order_is_roll_then_pitch_then_yaw(phase: float) -> None:
    expected = _ry(phase) @ _rx(phase) @ _rz(phase)
    np.testing.assert_allclose(rotation_matrix(phase), expected, atol=1e-12)


def test_no_seam_at_wrap_point() -> None:
    np.testing.assert_allclose(rotation_matrix(2 * math.pi - 1e-9), rotation_matrix(0.0), atol=1e-6)


def test_zero_quaternion_is_rejected() -> None:
    with pytest.raises(ValueError):
        quaternion_to_matrix((0.0, 0.0, 0.0, 0.0))


def test_non_unit_quaternion_is_normalised() -> None:
    np.testing.assert_allclose(quaternion_to_matrix((0.0, 0.0, 0.0, 5.0)), np.eye(3))


def test_rotate_points_applies_matrix_to_each_row() -> None:
    pts = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    out = rotate_points(pts, _rz(math.pi / 2))
    np.testing.assert_allclose(out, [[0.0, 1.0, 0.0], [-1.0, 0.0, 0.0]], atol=1e-12)


def test_rotation_table_is_keyed_by_integer_steps() -> None:
    table = RotationTable(8)
    assert len(table) == 8
    np.testing.assert_array_equal(table[0], np.eye(3))
    np.testing.assert_array_equal(table[8], table[0])
    np.testing.assert_allclose(table[3], rotation_matrix(2 * math.pi * 3 / 8), atol=1e-12)
    with pytest.raises(TypeError):
        table[1.0]  # type: ignore[index]


def test_rotation_table_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RotationTable(0)


def test_clock_rotation_follows_elapsed_time() -> None:
    state = MorphState()
    m = ClockRotation(speed=2.0).advance(state, 0.5)
    assert state.rotation_phase == pytest.approx(1.0)
    np.testing.assert_allclose(m, rotation_matrix(1.0))


def test_table_rotation_advances_one_step_per_frame() -> None:
    state = MorphState()
    source = TableRotation(4)
    for expected_step in (1, 2, 3, 0):
        m = source.advance(state, 123.0)
        assert state.rotation_step == expected_step
        np.testing.assert_array_equal(m, source.table[expected_step])


def test_make_rotation_source() -> None:
    assert isinstance(make_rotation_source("clock", speed=1.0), ClockRotation)
    assert isinstance(make_rotation_source(" TABLE ", table_size=10), TableRotation)
    with pytest.raises(ValueError):
        make_rotation_source("spline")
