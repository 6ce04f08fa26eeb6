from __future__ import annotations

from typing import Sequence

from .algebra import Vector4
from .mesh import Wireframe

BOX_EDGES = (
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 0),
    (4, 5),
    (5, 6),
    (6, 7),
    (7, 4),
    (0, 4),
    (1, 5),
    (2, 6),
    (3, 7),
)


def make_box(
    size: Sequence[float] = (2.0, 2.0, 2.0),
    center: Sequence[float] = (0.0, 0.0, 4.0),
) -> Wireframe:
    """Axis-aligned box specified by size (dx, dy, dz) and center.

    Vertices run around the near face (-z) then the far face, starting at
    the +x/+y corner; the center becomes the pivot origin.
    """

    sx, sy, sz = (float(v) for v in size)
    cx, cy, cz = (float(v) for v in center)
    hx, hy, hz = sx / 2.0, sy / 2.0, sz / 2.0
    corners = [(1, 1), (-1, 1), (-1, -1), (1, -1)]
    vertices = [
        Vector4(cx + i * hx, cy + j * hy, cz + k * hz)
        for k in (-1, 1)
        for i, j in corners
    ]
    return Wireframe(vertices=tuple(vertices), edges=BOX_EDGES, origin=Vector4(cx, cy, cz))


def make_cube() -> Wireframe:
    """The default scene: a 2-unit cube centered at (0, 0, 4)."""
    return make_box()


def make_pyramid(
    base: float = 2.0,
    height: float = 2.0,
    center: Sequence[float] = (0.0, 0.0, 4.0),
) -> Wireframe:
    """Square pyramid with its base in the y = center - height/2 plane, apex up."""

    cx, cy, cz = (float(v) for v in center)
    half = float(base) / 2.0
    bottom = cy - float(height) / 2.0
    vertices = (
        Vector4(cx + half, bottom, cz - half),
        Vector4(cx - half, bottom, cz - half),
        Vector4(cx - half, bottom, cz + half),
        Vector4(cx + half, bottom, cz + half),
        Vector4(cx, cy + float(height) / 2.0, cz),
    )
    edges = ((0, 1), (1, 2), (2, 3), (3, 0), (0, 4), (1, 4), (2, 4), (3, 4))
    return Wireframe(vertices=vertices, edges=edges, origin=Vector4(cx, cy, cz))
