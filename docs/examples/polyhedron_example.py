"""Hand-written octahedron, the way a custom mesh literal is declared.

Run with:
  wireview view docs/examples/polyhedron_example.py
"""

from __future__ import annotations

from wireview.mesh import Wireframe


def build():
    cx, cy, cz = 0.0, 0.0, 4.0
    vertices = [
        (cx + 1.0, cy, cz),
        (cx, cy + 1.0, cz),
        (cx - 1.0, cy, cz),
        (cx, cy - 1.0, cz),
        (cx, cy, cz - 1.0),
        (cx, cy, cz + 1.0),
    ]
    ring = [(0, 1), (1, 2), (2, 3), (3, 0)]
    spokes = [(i, pole) for pole in (4, 5) for i in range(4)]
    return Wireframe(vertices=vertices, edges=ring + spokes, origin=(cx, cy, cz))
