from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw

from .algebra import Vector4
from .projection import ProjectedWireframe

RGB = tuple[int, int, int]

AXIS_COLORS: tuple[RGB, RGB, RGB] = ((255, 0, 0), (0, 255, 0), (0, 0, 255))
EDGE_COLOR: RGB = (0, 0, 0)


@dataclass(frozen=True)
class Segment:
    start: tuple[float, float]
    end: tuple[float, float]
    color: RGB


class Surface:
    """Maps normalized device coordinates onto a width x height pixel grid."""

    def __init__(self, width: int = 800, height: int = 600, background: str | RGB = "white", line_width: int = 1):
        if width <= 0 or height <= 0:
            raise ValueError("Surface dimensions must be positive.")
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self.line_width = line_width

    def denormalize(self, x: float, y: float) -> tuple[float, float]:
        # Screen rows grow downward, so y is flipped.
        px = (self.width * (x + 1.0)) / 2.0
        py = self.height - (self.height * (y + 1.0)) / 2.0
        return px, py

    def segments(self, projected: ProjectedWireframe) -> list[Segment]:
        """Axis rays (red/green/blue) from the origin, followed by every edge.

        Lines with an endpoint that could not be projected are left out.
        """

        def line(v1: Vector4, v2: Vector4, color: RGB) -> Segment | None:
            if not all(math.isfinite(c) for c in (v1.x, v1.y, v2.x, v2.y)):
                return None
            return Segment(self.denormalize(v1.x, v1.y), self.denormalize(v2.x, v2.y), color)

        candidates = [line(projected.origin, axis, color) for axis, color in zip(projected.axes, AXIS_COLORS)]
        candidates += [line(projected.vertices[a], projected.vertices[b], EDGE_COLOR) for a, b in projected.edges]
        return [segment for segment in candidates if segment is not None]

    def draw(self, projected: ProjectedWireframe, image: Image.Image | None = None) -> Image.Image:
        """Clear `image` (or a new one) and stroke the projected wireframe onto it."""

        if image is None:
            image = Image.new("RGB", (self.width, self.height), self.background)
        else:
            image.paste(self.background, (0, 0, image.width, image.height))
        draw = ImageDraw.Draw(image)
        for segment in self.segments(projected):
            draw.line([segment.start, segment.end], fill=segment.color, width=self.line_width)
        return image

    def save(self, projected: ProjectedWireframe, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.draw(projected).save(path)
        return path
