"""A stretched box off to the side of the view axis.

Run with:
  wireview view docs/examples/box_example.py
"""

from __future__ import annotations

from wireview.primitives import make_box


def build():
    return make_box(size=(3.0, 1.0, 1.0), center=(0.5, 0.0, 5.0))
