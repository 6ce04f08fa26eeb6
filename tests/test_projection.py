from __future__ import annotations

import math

import numpy as np
import pytest

from tests.helpers import coords
from wireview.algebra import Vector4
from wireview.camera import Camera
from wireview.mesh import Wireframe
from wireview.projection import camera_basis, perspective_matrix, project, to_camera_space


def _xy(vectors):
    return coords(vectors)[:, :2]


def test_perspective_matrix_rows():
    rows = perspective_matrix(90.0).rows()
    assert rows[0] == pytest.approx([1.0, 0.0, 0.0, 0.0])
    assert rows[1] == pytest.approx([0.0, 1.0, 0.0, 0.0])
    assert rows[2] == rows[3] == [0.0, 0.0, 1.0, 0.0]


def test_perspective_divide_at_ninety_degrees():
    proj = perspective_matrix(90.0)
    for x, y, z in [(2.0, 1.0, 4.0), (-3.0, 0.5, 2.0), (1.0, -1.0, 7.5)]:
        out = proj.multiply_vector(Vector4(x, y, z)).dehomogenize()
        assert out.x == pytest.approx(x / z)
        assert out.y == pytest.approx(y / z)
        assert out.z == z
        assert out.w == z


def test_narrower_fov_magnifies(cube):
    projected = project(cube, fov=60.0)
    assert projected.vertices[0].x == pytest.approx(math.sqrt(3.0) / 3.0)


def test_project_single_point():
    shape = Wireframe(vertices=[(2.0, 1.0, 4.0)], edges=[], origin=(0.0, 0.0, 4.0))
    projected = project(shape, Camera(), fov=90.0)
    assert projected.vertices[0].coords() == pytest.approx((0.5, 0.25, 4.0, 4.0))
    assert projected.origin.coords() == pytest.approx((0.0, 0.0, 4.0, 4.0))


def test_axis_endpoints_hang_off_origin(cube):
    projected = project(cube)
    x_end, y_end, z_end = projected.axes
    assert (x_end.x, x_end.y) == pytest.approx((0.25, 0.0))
    assert (y_end.x, y_end.y) == pytest.approx((0.0, 0.25))
    assert (z_end.x, z_end.y) == pytest.approx((0.0, 0.0))
    assert z_end.w == pytest.approx(5.0)


def test_topology_is_unchanged(cube):
    assert project(cube).edges == cube.edges


def test_projection_does_not_touch_input(cube):
    before = coords(cube.vertices)
    project(cube, Camera().translate("z", -3.0), fov=45.0)
    assert np.array_equal(coords(cube.vertices), before)


def test_half_turn_matches_opposite_corner(cube):
    projected = project(cube.rotate("y", 180.0), fov=90.0)
    original = project(cube, fov=90.0)
    assert _xy(projected.vertices)[0] == pytest.approx(_xy(original.vertices)[5])
    assert _xy(projected.vertices)[0] == pytest.approx((-0.2, 0.2))


def test_camera_translation_shrinks_view(cube):
    projected = project(cube, Camera().translate("z", -2.0))
    assert _xy(projected.vertices)[0] == pytest.approx((0.2, 0.2))


def test_camera_basis_signed_components():
    turned = Camera().rotate("y", 90.0)
    local = camera_basis(turned.axes, Vector4(1.0, 2.0, 3.0))
    assert local.coords()[:3] == pytest.approx((-3.0, 2.0, 1.0))
    identity = camera_basis(Camera().axes, Vector4(-1.0, 0.0, 2.0))
    assert identity.coords() == pytest.approx((-1.0, 0.0, 2.0, 1.0))


def test_camera_rotation_moves_object_out_of_view(cube):
    view = to_camera_space(cube, Camera().rotate("y", 90.0))
    # The cube now sits along the camera's -x axis.
    assert view.origin.coords()[:3] == pytest.approx((-4.0, 0.0, 0.0), abs=1e-12)


def test_point_in_camera_plane_has_no_image():
    shape = Wireframe(vertices=[(1.0, 1.0, 0.0), (1.0, 1.0, 2.0)], edges=[(0, 1)], origin=(0.0, 0.0, 4.0))
    projected = project(shape)
    lost, kept = projected.vertices
    assert math.isnan(lost.x) and math.isnan(lost.y)
    assert lost.w == 0.0
    assert (kept.x, kept.y) == pytest.approx((0.5, 0.5))


def test_cube_touching_camera_plane_still_projects(cube):
    projected = project(cube.translate("z", -3.0))
    front = projected.vertices[:4]
    back = projected.vertices[4:]
    assert all(math.isnan(v.x) for v in front)
    assert np.allclose(_xy(back), [[0.5, 0.5], [-0.5, 0.5], [-0.5, -0.5], [0.5, -0.5]])
