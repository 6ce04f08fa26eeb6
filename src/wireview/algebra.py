"""Homogeneous 4-vectors and 4x4 matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .validation import InvalidDimension, ProjectionError


@dataclass(frozen=True)
class Vector4:
    """Homogeneous coordinate; w defaults to 1 for points."""

    x: float
    y: float
    z: float
    w: float = 1.0

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Vector4":
        arr = np.asarray(values, dtype=float).reshape(-1)
        if arr.size == 3:
            return cls(float(arr[0]), float(arr[1]), float(arr[2]))
        if arr.size != 4:
            raise InvalidDimension("Vector4 expects 3 or 4 components.")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3]))

    def coords(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def as_array(self) -> np.ndarray:
        return np.array(self.coords(), dtype=float)

    def dot(self, other: "Vector4") -> float:
        # w is not part of the product.
        return self.x * other.x + self.y * other.y + self.z * other.z

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def dehomogenize(self) -> "Vector4":
        """Divide x and y by w; z and w are kept so depth stays available."""

        if self.w == 0:
            raise ProjectionError(f"Cannot divide {self.coords()} by w == 0.")
        return Vector4(self.x / self.w, self.y / self.w, self.z, self.w)


class Matrix4:
    """4x4 homogeneous transform stored row-major.

    Vectors are columns multiplied on the right, so ``a.multiply_matrix(b)``
    applies ``b`` first.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float] | np.ndarray) -> None:
        try:
            arr = np.asarray(values, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidDimension(f"Matrix4 expects 16 values ({exc}).") from exc
        if arr.size != 16 or arr.ndim not in (1, 2) or (arr.ndim == 2 and arr.shape != (4, 4)):
            raise InvalidDimension(f"Matrix4 expects 16 values (got shape {arr.shape}).")
        self._values = arr.reshape(4, 4).copy()
        self._values.setflags(write=False)

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls(np.eye(4))

    @property
    def values(self) -> np.ndarray:
        """Read-only 4x4 view of the matrix."""
        return self._values

    def rows(self) -> list[list[float]]:
        return [[float(v) for v in row] for row in self._values]

    def multiply_vector(self, vector: Vector4) -> Vector4:
        result = self._values @ vector.as_array()
        return Vector4(float(result[0]), float(result[1]), float(result[2]), float(result[3]))

    def multiply_vectors(self, vectors: Iterable[Vector4]) -> tuple[Vector4, ...]:
        vectors = list(vectors)
        if not vectors:
            return ()
        stacked = np.array([v.coords() for v in vectors], dtype=float)
        transformed = (self._values @ stacked.T).T
        return tuple(Vector4(*(float(c) for c in row)) for row in transformed)

    def multiply_matrix(self, other: "Matrix4") -> "Matrix4":
        return Matrix4(self._values @ other._values)

    def __matmul__(self, other: object):
        if isinstance(other, Matrix4):
            return self.multiply_matrix(other)
        if isinstance(other, Vector4):
            return self.multiply_vector(other)
        return NotImplemented

    def column(self, index: int) -> Vector4:
        if not 0 <= index < 4:
            raise IndexError("Matrix4 column index must be in [0, 4).")
        col = self._values[:, index]
        return Vector4(float(col[0]), float(col[1]), float(col[2]), float(col[3]))

    def is_identity(self) -> bool:
        # Exact comparison, no tolerance.
        return bool(np.array_equal(self._values, np.eye(4)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix4({self.rows()!r})"
