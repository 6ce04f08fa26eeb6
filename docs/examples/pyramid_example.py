"""Square pyramid, pre-tilted so its apex leans toward the camera.

Run with:
  wireview view docs/examples/pyramid_example.py
"""

from __future__ import annotations

from wireview.primitives import make_pyramid


def build():
    return make_pyramid(base=2.0, height=2.5, center=(0.0, 0.0, 5.0)).rotate("x", 20.0)
