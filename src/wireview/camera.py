from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from .algebra import Vector4
from .mesh import WORLD_AXES, AxisFrame, as_axis_frame
from .state import Axis, RigidState
from .transforms import rotation_about_axis, translation
from .validation import axis_index


@dataclass(frozen=True)
class Camera:
    """Viewpoint with an origin and axis frame; rotates and translates, never scales."""

    origin: Vector4 = Vector4(0.0, 0.0, 0.0)
    axes: AxisFrame = WORLD_AXES
    state: RigidState = field(default_factory=RigidState)

    def __post_init__(self) -> None:
        if not isinstance(self.origin, Vector4):
            object.__setattr__(self, "origin", Vector4.from_array(self.origin))
        object.__setattr__(self, "axes", as_axis_frame(self.axes))

    @classmethod
    def at(cls, origin: Sequence[float]) -> "Camera":
        return cls(origin=Vector4.from_array(origin))

    def rotate(self, axis: Axis, angle_deg: float) -> "Camera":
        # The camera origin is the pivot, so only the axis frame turns.
        delta, state = self.state.rotate(axis, angle_deg)
        rot = rotation_about_axis(delta, self.axes[axis_index(axis)])
        return replace(self, axes=as_axis_frame(rot.multiply_vectors(self.axes)), state=state)

    def translate(self, axis: Axis, amount: float) -> "Camera":
        delta, state = self.state.translate(axis, amount)
        shift = translation(delta, self.axes[axis_index(axis)])
        return replace(self, origin=shift.multiply_vector(self.origin), state=state)
