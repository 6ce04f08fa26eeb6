from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from .validation import axis_index, validate_scale_factor

Axis = Literal["x", "y", "z"]
Triple = tuple[float, float, float]


def _with_component(values: Triple, index: int, value: float) -> Triple:
    updated = list(values)
    updated[index] = float(value)
    return (updated[0], updated[1], updated[2])


@dataclass(frozen=True)
class RigidState:
    """Absolute rotation (degrees) and translation last applied per axis."""

    rotation: Triple = (0.0, 0.0, 0.0)
    translation: Triple = (0.0, 0.0, 0.0)

    def rotate(self, axis: Axis, angle_deg: float) -> tuple[float, "RigidState"]:
        """Return the angle delta to apply and the state with `angle_deg` stored."""
        index = axis_index(axis)
        delta = float(angle_deg) - self.rotation[index]
        return delta, replace(self, rotation=_with_component(self.rotation, index, angle_deg))

    def translate(self, axis: Axis, amount: float) -> tuple[float, "RigidState"]:
        index = axis_index(axis)
        delta = float(amount) - self.translation[index]
        return delta, replace(self, translation=_with_component(self.translation, index, amount))


@dataclass(frozen=True)
class TransformState(RigidState):
    """Rigid state plus absolute scale factors (default 1)."""

    scale: Triple = (1.0, 1.0, 1.0)

    def rescale(self, axis: Axis, factor: float) -> tuple[float, "TransformState"]:
        """Return the multiplicative delta and the state with `factor` stored.

        Factors must stay strictly positive; a stored 0 would make the next
        delta undefined.
        """
        index = axis_index(axis)
        factor = validate_scale_factor(factor)
        delta = factor / self.scale[index]
        return delta, replace(self, scale=_with_component(self.scale, index, factor))
