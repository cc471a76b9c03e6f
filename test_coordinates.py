#!/usr/bin/env python3
"""
Tests for Unity -> Maya coordinate, rotation and frame conversion
"""

import math

import numpy as np
import pytest

from unity2maya.core.coordinates import (
    convert_position, convert_scale, convert_rotation, convert_winding,
    quaternion_to_matrix, round_half_away_from_zero, frame_index,
)


def _axis_quaternion(axis, degrees):
    half = math.radians(degrees) / 2.0
    q = [0.0, 0.0, 0.0, math.cos(half)]
    q["xyz".index(axis)] = math.sin(half)
    return q


def test_position_negates_x():
    assert convert_position([1.0, 2.0, 3.0]).tolist() == [-1.0, 2.0, 3.0]


def test_position_unit_scale_applied_after_flip():
    assert convert_position([1.0, 2.0, 3.0], unit_scale=100.0).tolist() == [-100.0, 200.0, 300.0]


def test_position_batch():
    result = convert_position([[1.0, 0.0, 0.0], [0.0, 1.0, -1.0]])
    assert result.shape == (2, 3)
    assert result.tolist() == [[-1.0, 0.0, 0.0], [0.0, 1.0, -1.0]]


def test_scale_is_identity():
    scale = np.array([1.5, 2.0, 0.5])
    result = convert_scale(scale)
    assert result.tolist() == [1.5, 2.0, 0.5]
    # Returns a copy, not the caller's array
    result[0] = 9.0
    assert scale[0] == 1.5


def test_identity_quaternion_gives_zero_angles():
    assert np.allclose(convert_rotation([0.0, 0.0, 0.0, 1.0]), [0.0, 0.0, 0.0])


def test_rotation_about_x_keeps_sign():
    assert np.allclose(convert_rotation(_axis_quaternion('x', 30.0)), [30.0, 0.0, 0.0])


def test_rotation_about_y_flips_sign():
    assert np.allclose(convert_rotation(_axis_quaternion('y', 30.0)), [0.0, -30.0, 0.0])


def test_rotation_about_z_flips_sign():
    assert np.allclose(convert_rotation(_axis_quaternion('z', 30.0)), [0.0, 0.0, -30.0])


def test_rotation_gimbal_lock_is_finite():
    euler = convert_rotation(_axis_quaternion('y', 90.0))
    assert np.all(np.isfinite(euler))
    assert np.allclose(euler, [0.0, -90.0, 0.0], atol=1e-6)


def test_rotation_batch_matches_single():
    samples = [_axis_quaternion('x', 10.0), _axis_quaternion('z', 45.0), [0.0, 0.0, 0.0, 1.0]]
    batch = convert_rotation(np.array(samples))
    assert batch.shape == (3, 3)
    for sample, euler in zip(samples, batch):
        assert np.allclose(convert_rotation(sample), euler)


def test_quaternion_matrix_is_orthonormal():
    q = np.array([0.1, 0.7, -0.3, 0.6])
    q = q / np.linalg.norm(q)
    m = quaternion_to_matrix(q)
    assert np.allclose(m @ m.T, np.eye(3))
    assert math.isclose(np.linalg.det(m), 1.0, rel_tol=1e-9)


def test_winding_reverses_each_face():
    assert convert_winding([0, 1, 2, 3, 4, 5, 6], [3, 4]) == [2, 1, 0, 6, 5, 4, 3]


@pytest.mark.parametrize("value, expected", [
    (2.5, 3),
    (-2.5, -3),
    (2.4, 2),
    (0.0, 0),
])
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


def test_frame_index_is_one_based():
    assert frame_index(0.0, 30.0) == 1
    assert frame_index(1.0, 30.0) == 31


def test_frame_index_rounds_ties_up():
    # 0.5s at 5fps is exactly 2.5 frames
    assert frame_index(0.5, 5.0) == 4
