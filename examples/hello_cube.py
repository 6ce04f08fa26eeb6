"""Example wireview model: the default cube, shifted and given a quarter turn."""

from __future__ import annotations

from wireview.primitives import make_cube


def build():
    """Return the cube already moved right and yawed to exercise the viewer."""

    return make_cube().translate("x", 1.0).rotate("y", 90.0)
