#!/usr/bin/env python3
"""
Coordinates Module
Unity -> Maya coordinate, rotation and time conversion.

Unity is left-handed (Y up, Z forward), Maya is right-handed (Y up).
Mirroring across the YZ plane (negating X) maps one onto the other:
positions negate X, quaternions negate their Y and Z parts, and
triangle winding flips. Rotations are written as Euler angles in Maya's
default "xyz" rotate order, in degrees.

All functions are pure and accept a single sample or an (n, k) array.
"""

import math

import numpy as np

# Below this cos(y) the XYZ decomposition is in gimbal lock
GIMBAL_EPSILON = 1e-6

MIRROR_POSITION = np.array([-1.0, 1.0, 1.0])
MIRROR_QUATERNION = np.array([1.0, -1.0, -1.0, 1.0])


def convert_position(position, unit_scale=1.0):
    """Convert Unity position(s) to Maya space

    Args:
        position: [x, y, z] or (n, 3) array
        unit_scale: Factor applied after the axis flip

    Returns:
        np.ndarray: Converted position(s), same shape as the input
    """
    return np.asarray(position, dtype=float) * MIRROR_POSITION * unit_scale


def convert_scale(scale):
    """Convert Unity scale(s) to Maya space

    Both tools use the same per-axis scale convention, so this is the
    identity. Kept as its own step so tracks always pass through it.
    """
    return np.array(scale, dtype=float)


def quaternion_to_matrix(quaternion):
    """Build the row-major (v' = v * M) rotation matrix of a unit quaternion

    Args:
        quaternion: (x, y, z, w)

    Returns:
        np.ndarray: 3x3 rotation matrix
    """
    x, y, z, w = (float(c) for c in quaternion)
    return np.array([
        [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y + z * w), 2.0 * (x * z - y * w)],
        [2.0 * (x * y - z * w), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z + x * w)],
        [2.0 * (x * z + y * w), 2.0 * (y * z - x * w), 1.0 - 2.0 * (x * x + y * y)],
    ])


def matrix_to_euler_xyz(rot):
    """Extract XYZ Euler angles (degrees) from a row-major rotation matrix

    Row-major decomposition for Maya's xyz rotate order (M = Rx * Ry * Rz).

    Args:
        rot: 3x3 rotation matrix

    Returns:
        np.ndarray: [rx, ry, rz] in degrees
    """
    cy = np.sqrt(rot[0][0]**2 + rot[0][1]**2)

    if cy > GIMBAL_EPSILON:
        x = np.arctan2(rot[1][2], rot[2][2])
        y = np.arctan2(-rot[0][2], cy)
        z = np.arctan2(rot[0][1], rot[0][0])
    else:
        # Gimbal lock: fold Z into X
        x = np.arctan2(-rot[2][1], rot[1][1])
        y = np.arctan2(-rot[0][2], cy)
        z = 0.0

    return np.degrees([x, y, z])


def convert_rotation(quaternion):
    """Convert Unity rotation quaternion(s) to Maya Euler angles

    Args:
        quaternion: (x, y, z, w) or (n, 4) array of unit quaternions

    Returns:
        np.ndarray: [rx, ry, rz] in degrees, or (n, 3) array
    """
    q = np.asarray(quaternion, dtype=float)
    if q.ndim == 1:
        return matrix_to_euler_xyz(quaternion_to_matrix(q * MIRROR_QUATERNION))

    eulers = np.zeros((len(q), 3))
    for i, sample in enumerate(q):
        eulers[i] = matrix_to_euler_xyz(quaternion_to_matrix(sample * MIRROR_QUATERNION))
    return eulers


def convert_winding(indices, counts):
    """Reverse every face's vertex order for the mirrored geometry

    Args:
        indices: Face vertex indices (flattened)
        counts: Number of vertices per face

    Returns:
        list: Reordered indices
    """
    result = []
    offset = 0
    for count in counts:
        face = list(indices[offset:offset + count])
        face.reverse()
        result.extend(face)
        offset += count
    return result


def round_half_away_from_zero(value):
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)"""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def frame_index(time_seconds, frame_rate):
    """Map a key time to Maya's 1-based frame number

    Args:
        time_seconds: Key time in seconds
        frame_rate: Clip frame rate

    Returns:
        int: round(time * frame_rate) + 1
    """
    return round_half_away_from_zero(time_seconds * frame_rate) + 1
