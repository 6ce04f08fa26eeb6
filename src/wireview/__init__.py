"""wireview – interactive perspective wireframe viewer."""

from __future__ import annotations

from .algebra import Matrix4, Vector4
from .camera import Camera
from .frame import Frame, FrameInput, SceneState, ViewerSession, apply_input, render_frame
from .mesh import Wireframe
from .primitives import make_box, make_cube, make_pyramid
from .projection import ProjectedWireframe, perspective_matrix, project

__all__ = [
    "__version__",
    "Camera",
    "Frame",
    "FrameInput",
    "Matrix4",
    "ProjectedWireframe",
    "SceneState",
    "Vector4",
    "ViewerSession",
    "Wireframe",
    "apply_input",
    "make_box",
    "make_cube",
    "make_pyramid",
    "perspective_matrix",
    "project",
    "render_frame",
]

__version__ = "0.1.0"
