from __future__ import annotations

import numpy as np

def coords(vectors) -> np.ndarray:
    return np.array([v.coords()[:3] for v in vectors], dtype=float)

def assert_orthonormal(axes, atol: float = 1e-9) -> None:
    frame = coords(axes)
    assert np.allclose(frame @ frame.T, np.eye(3), atol=atol)
