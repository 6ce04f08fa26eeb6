from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

import numpy as np

from .algebra import Matrix4, Vector4
from .state import Axis, TransformState
from .transforms import (
    local_to_world,
    rotation_about_axis,
    scale_along_axis,
    translation,
    world_to_local,
)
from .validation import ValidationError, axis_index, validate_edges

Edge = tuple[int, int]
AxisFrame = tuple[Vector4, Vector4, Vector4]

WORLD_AXES: AxisFrame = (
    Vector4(1.0, 0.0, 0.0),
    Vector4(0.0, 1.0, 0.0),
    Vector4(0.0, 0.0, 1.0),
)


def as_vectors(points: Iterable[Vector4 | Sequence[float]]) -> tuple[Vector4, ...]:
    return tuple(p if isinstance(p, Vector4) else Vector4.from_array(p) for p in points)


def as_axis_frame(axes: Iterable[Vector4 | Sequence[float]]) -> AxisFrame:
    frame = as_vectors(axes)
    if len(frame) != 3:
        raise ValidationError("An axis frame needs exactly three vectors.")
    return (frame[0], frame[1], frame[2])


@dataclass(frozen=True)
class Wireframe:
    """Vertices joined by edges, with a pivot origin and its own axis frame.

    Transform methods take absolute parameter values, apply only the change
    since the previous call for that axis, and return a new Wireframe.
    """

    vertices: tuple[Vector4, ...]
    edges: tuple[Edge, ...]
    origin: Vector4 = Vector4(0.0, 0.0, 0.0)
    axes: AxisFrame = WORLD_AXES
    state: TransformState = field(default_factory=TransformState)

    def __post_init__(self) -> None:
        vertices = as_vectors(self.vertices)
        edge_arr = np.asarray(self.edges, dtype=int)
        if edge_arr.size == 0:
            edge_arr = edge_arr.reshape(0, 2)
        validate_edges(edge_arr, len(vertices))
        origin = self.origin if isinstance(self.origin, Vector4) else Vector4.from_array(self.origin)
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "edges", tuple((int(a), int(b)) for a, b in edge_arr))
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "axes", as_axis_frame(self.axes))

    def copy(self) -> "Wireframe":
        return replace(self)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    def as_array(self) -> np.ndarray:
        """Vertices as an (N, 4) float array."""
        if not self.vertices:
            return np.zeros((0, 4), dtype=float)
        return np.array([v.coords() for v in self.vertices], dtype=float)

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        if self.n_vertices == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        xyz = self.as_array()[:, :3]
        mins = xyz.min(axis=0)
        maxs = xyz.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]), float(mins[2]), float(maxs[2]))

    def transform_vertices(self, matrix: Matrix4) -> "Wireframe":
        return replace(self, vertices=matrix.multiply_vectors(self.vertices))

    def transform_axes(self, matrix: Matrix4) -> "Wireframe":
        return replace(self, axes=as_axis_frame(matrix.multiply_vectors(self.axes)))

    def apply_matrix(self, matrix: Matrix4) -> "Wireframe":
        """Apply `matrix` to vertices and origin, bypassing the parameter state."""
        return replace(
            self,
            vertices=matrix.multiply_vectors(self.vertices),
            origin=matrix.multiply_vector(self.origin),
        )

    def rotate(self, axis: Axis, angle_deg: float) -> "Wireframe":
        """Rotate about the object's own `axis` through its origin to `angle_deg`."""
        delta, state = self.state.rotate(axis, angle_deg)
        axis_vector = self.axes[axis_index(axis)]
        rot = rotation_about_axis(delta, axis_vector)
        pivoted = local_to_world(self.origin) @ rot @ world_to_local(self.origin)
        rotated = replace(self.transform_axes(rot), state=state)
        return rotated.transform_vertices(pivoted)

    def translate(self, axis: Axis, amount: float) -> "Wireframe":
        """Move along the object's own `axis` so the offset equals `amount`."""
        delta, state = self.state.translate(axis, amount)
        shift = translation(delta, self.axes[axis_index(axis)])
        return replace(self.apply_matrix(shift), state=state)

    def scale(self, axis: Axis, factor: float) -> "Wireframe":
        """Stretch along the object's own `axis` about its origin to `factor`.

        The axis frame keeps unit length; only vertices stretch.
        """
        delta, state = self.state.rescale(axis, factor)
        stretch = scale_along_axis(delta, self.axes[axis_index(axis)])
        pivoted = local_to_world(self.origin) @ stretch @ world_to_local(self.origin)
        return replace(self.transform_vertices(pivoted), state=state)
