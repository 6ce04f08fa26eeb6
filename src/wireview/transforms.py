from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .algebra import Matrix4, Vector4
from .validation import unit_axis

AxisLike = Union[Vector4, Sequence[float]]


def _xyz(vector: AxisLike) -> np.ndarray:
    if isinstance(vector, Vector4):
        return np.array([vector.x, vector.y, vector.z], dtype=float)
    return np.asarray(vector, dtype=float).reshape(-1)[:3]


def _affine(linear: np.ndarray | None = None, offset: np.ndarray | None = None) -> Matrix4:
    mat = np.eye(4)
    if linear is not None:
        mat[:3, :3] = linear
    if offset is not None:
        mat[:3, 3] = offset
    return Matrix4(mat)


def rotation_about_axis(angle_deg: float, axis: AxisLike) -> Matrix4:
    """Rotate by `angle_deg` about an axis through the origin (Rodrigues)."""
    x, y, z = unit_axis(_xyz(axis))
    angle_rad = np.deg2rad(angle_deg)
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    C = 1.0 - c
    rot = np.array(
        [
            [x * x * C + c, x * y * C - z * s, x * z * C + y * s],
            [y * x * C + z * s, y * y * C + c, y * z * C - x * s],
            [z * x * C - y * s, z * y * C + x * s, z * z * C + c],
        ],
        dtype=float,
    )
    return _affine(rot)


def translation(amount: float, direction: AxisLike) -> Matrix4:
    """Translate by `amount` along `direction` (not normalized)."""
    return _affine(offset=float(amount) * _xyz(direction))


def scale_along_axis(factor: float, axis: AxisLike) -> Matrix4:
    """Scale by `factor` along a unit axis, leaving the orthogonal plane alone."""
    a = unit_axis(_xyz(axis))
    return _affine(np.eye(3) + (float(factor) - 1.0) * np.outer(a, a))


def world_to_local(origin: AxisLike) -> Matrix4:
    return _affine(offset=-_xyz(origin))


def local_to_world(origin: AxisLike) -> Matrix4:
    return _affine(offset=_xyz(origin))


def rotation_x(angle_deg: float) -> Matrix4:
    rad = np.deg2rad(angle_deg)
    c, s = np.cos(rad), np.sin(rad)
    return _affine(np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]]))


def rotation_y(angle_deg: float) -> Matrix4:
    rad = np.deg2rad(angle_deg)
    c, s = np.cos(rad), np.sin(rad)
    return _affine(np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]]))


def rotation_z(angle_deg: float) -> Matrix4:
    rad = np.deg2rad(angle_deg)
    c, s = np.cos(rad), np.sin(rad)
    return _affine(np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]))


def translation_x(amount: float) -> Matrix4:
    return translation(amount, (1.0, 0.0, 0.0))


def translation_y(amount: float) -> Matrix4:
    return translation(amount, (0.0, 1.0, 0.0))


def translation_z(amount: float) -> Matrix4:
    return translation(amount, (0.0, 0.0, 1.0))


def scale_x(factor: float) -> Matrix4:
    return _affine(np.diag([float(factor), 1.0, 1.0]))


def scale_y(factor: float) -> Matrix4:
    return _affine(np.diag([1.0, float(factor), 1.0]))


def scale_z(factor: float) -> Matrix4:
    return _affine(np.diag([1.0, 1.0, float(factor)]))
