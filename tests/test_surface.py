from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from wireview.projection import project
from wireview.surface import AXIS_COLORS, EDGE_COLOR, Surface


def test_denormalize_flips_y():
    surface = Surface(800, 600)
    assert surface.denormalize(-1.0, -1.0) == (0.0, 600.0)
    assert surface.denormalize(1.0, 1.0) == (800.0, 0.0)
    assert surface.denormalize(0.0, 0.0) == (400.0, 300.0)


def test_rejects_empty_surface():
    with pytest.raises(ValueError):
        Surface(0, 10)


def test_segments_axes_then_edges(cube):
    surface = Surface(800, 600)
    segments = surface.segments(project(cube))
    assert len(segments) == 3 + cube.n_edges
    assert [s.color for s in segments[:3]] == list(AXIS_COLORS)
    assert all(s.color == EDGE_COLOR for s in segments[3:])
    assert all(s.start == (400.0, 300.0) for s in segments[:3])
    assert segments[0].end == pytest.approx((500.0, 300.0))
    assert segments[1].end == pytest.approx((400.0, 225.0))


def test_draw_strokes_axis_rays(cube):
    surface = Surface(800, 600)
    image = surface.draw(project(cube))
    assert image.size == (800, 600)
    assert image.getpixel((450, 300)) == (255, 0, 0)
    assert image.getpixel((400, 260)) == (0, 255, 0)
    assert image.getpixel((10, 10)) == (255, 255, 255)


def test_draw_clears_existing_image(cube):
    surface = Surface(200, 100)
    canvas = Image.new("RGB", (200, 100), (9, 9, 9))
    surface.draw(project(cube), canvas)
    assert canvas.getpixel((1, 1)) == (255, 255, 255)


def test_save_writes_png(cube, tmp_path: Path):
    out = Surface(320, 240).save(project(cube), tmp_path / "nested" / "cube.png")
    assert out.exists()
    with Image.open(out) as img:
        assert img.size == (320, 240)


def test_lines_through_camera_plane_are_left_out(cube):
    surface = Surface(800, 600)
    projected = project(cube.translate("z", -3.0))
    segments = surface.segments(projected)
    # Only the far face survives; every other edge touches the front face at z == 0.
    assert len(segments) == 3 + 4
    assert [s.color for s in segments[:3]] == list(AXIS_COLORS)
    image = surface.draw(projected)
    assert image.size == (800, 600)
