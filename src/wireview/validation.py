from __future__ import annotations

from typing import Sequence

import numpy as np


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class InvalidDimension(ValidationError):
    """Raised when a matrix is not built from exactly 16 values."""


class DegenerateAxis(ValidationError):
    """Raised when a rotation or scale axis has no usable direction."""


class DivisionByZeroScale(ValidationError):
    """Raised when a scale factor would make the next scale delta undefined."""


class ProjectionError(ValidationError):
    """Raised when a point cannot be perspective-divided (w == 0)."""


AXIS_NAMES = ("x", "y", "z")


def axis_index(axis: str) -> int:
    key = str(axis).strip().lower()
    if key not in AXIS_NAMES:
        raise ValidationError(f"Axis must be one of 'x', 'y', 'z' (got {axis!r}).")
    return AXIS_NAMES.index(key)


def unit_axis(axis: Sequence[float]) -> np.ndarray:
    """Return `axis` as a unit 3-vector, rejecting zero-length or non-finite input."""

    vec = np.asarray(axis, dtype=float).reshape(-1)[:3]
    if vec.size != 3 or np.any(~np.isfinite(vec)):
        raise DegenerateAxis("Axis must be three finite components.")
    norm = np.linalg.norm(vec)
    if norm == 0:
        raise DegenerateAxis("Axis must be non-zero.")
    if norm == 1.0:
        return vec
    return vec / norm


def validate_scale_factor(value: float) -> float:
    factor = float(value)
    if not np.isfinite(factor) or factor <= 0.0:
        raise DivisionByZeroScale(f"Scale factor must be strictly positive (got {value!r}).")
    return factor


def validate_edges(edges: np.ndarray, n_vertices: int) -> None:
    if edges.size == 0:
        return
    if edges.ndim != 2 or edges.shape[1] != 2:
        raise ValidationError("Edges must be Nx2 index pairs.")
    if np.any(edges < 0) or np.any(edges >= n_vertices):
        raise ValidationError(f"Edge indices must be in [0, {n_vertices}).")
