from __future__ import annotations

import pytest

from tests.helpers import assert_orthonormal
from wireview.algebra import Vector4
from wireview.camera import Camera


def test_default_camera_sits_at_world_origin():
    camera = Camera()
    assert camera.origin == Vector4(0.0, 0.0, 0.0)
    assert [axis.coords()[:3] for axis in camera.axes] == [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]


def test_translate_is_idempotent():
    camera = Camera().translate("z", -2.0)
    again = camera.translate("z", -2.0)
    assert again.origin == Vector4(0.0, 0.0, -2.0)
    assert again.state.translation == (0.0, 0.0, -2.0)


def test_rotate_turns_axes_in_place():
    camera = Camera.at((1.0, 2.0, 3.0)).rotate("y", 90.0)
    assert camera.origin == Vector4(1.0, 2.0, 3.0)
    x_axis, y_axis, z_axis = (axis.coords()[:3] for axis in camera.axes)
    assert x_axis == pytest.approx((0.0, 0.0, -1.0), abs=1e-12)
    assert y_axis == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)
    assert z_axis == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)


def test_translate_follows_rotated_axes():
    camera = Camera().rotate("y", 90.0).translate("x", 2.0)
    assert camera.origin.coords() == pytest.approx((0.0, 0.0, -2.0, 1.0), abs=1e-12)


def test_rotation_delta_and_orthonormal_axes():
    camera = Camera()
    for axis, angle in [("x", 20.0), ("z", 200.0), ("y", 75.0), ("x", 5.0)]:
        camera = camera.rotate(axis, angle)
        assert_orthonormal(camera.axes)
    assert camera.state.rotation == (5.0, 75.0, 200.0)


def test_camera_has_no_scale():
    assert not hasattr(Camera(), "scale")
