"""Camera-space transform and perspective projection of a wireframe."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .algebra import Matrix4, Vector4
from .camera import Camera
from .mesh import AxisFrame, Edge, Wireframe
from .transforms import local_to_world, world_to_local


@dataclass(frozen=True)
class ProjectedWireframe:
    """Geometry after the perspective divide; x and y are normalized, z and w kept."""

    vertices: tuple[Vector4, ...]
    edges: tuple[Edge, ...]
    origin: Vector4
    axes: AxisFrame


@dataclass(frozen=True)
class CameraSpace:
    """A wireframe re-expressed along the camera's axes, before projection."""

    vertices: tuple[Vector4, ...]
    edges: tuple[Edge, ...]
    origin: Vector4
    axes: AxisFrame


def perspective_matrix(fov_deg: float) -> Matrix4:
    """Simplified perspective: the last row copies z into w, depth is not remapped."""
    f = 1.0 / np.tan(np.deg2rad(fov_deg) / 2.0)
    return Matrix4(
        [
            [f, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
        ]
    )


def camera_basis(axes: AxisFrame, vector: Vector4) -> Vector4:
    """Express `vector` in the coordinates of the camera axis frame.

    Each component is the length of the projection onto that axis, signed
    by the dot product (non-positive products count as negative).
    """

    v = np.array([vector.x, vector.y, vector.z], dtype=float)
    coords = []
    for axis in axes:
        a = np.array([axis.x, axis.y, axis.z], dtype=float)
        length = float(np.linalg.norm(np.outer(a, a) @ v))
        coords.append(length if float(a @ v) > 0 else -length)
    return Vector4(coords[0], coords[1], coords[2])


def to_camera_space(wireframe: Wireframe, camera: Camera) -> CameraSpace:
    # Axis vectors become endpoints hanging off the object's origin.
    endpoints = local_to_world(wireframe.origin).multiply_vectors(wireframe.axes)
    to_camera = world_to_local(camera.origin)

    def rebase(points: tuple[Vector4, ...]) -> tuple[Vector4, ...]:
        return tuple(camera_basis(camera.axes, p) for p in to_camera.multiply_vectors(points))

    axes = rebase(endpoints)
    return CameraSpace(
        vertices=rebase(wireframe.vertices),
        edges=wireframe.edges,
        origin=camera_basis(camera.axes, to_camera.multiply_vector(wireframe.origin)),
        axes=(axes[0], axes[1], axes[2]),
    )


def _divide(point: Vector4) -> Vector4:
    # A point in the camera plane has no image; it comes back with NaN x and y.
    if point.w == 0:
        return Vector4(math.nan, math.nan, point.z, point.w)
    return point.dehomogenize()


def project(wireframe: Wireframe, camera: Camera | None = None, fov: float = 90.0) -> ProjectedWireframe:
    """Project `wireframe` as seen from `camera` (world origin and axes if omitted).

    Points that land in the camera plane are not projectable and come back
    with NaN x and y; `Surface.segments` leaves out any line touching them.
    """

    view = to_camera_space(wireframe, camera or Camera())
    proj = perspective_matrix(fov)

    def divide(points: tuple[Vector4, ...]) -> tuple[Vector4, ...]:
        return tuple(_divide(p) for p in proj.multiply_vectors(points))

    axes = divide(view.axes)
    return ProjectedWireframe(
        vertices=divide(view.vertices),
        edges=view.edges,
        origin=_divide(proj.multiply_vector(view.origin)),
        axes=(axes[0], axes[1], axes[2]),
    )
