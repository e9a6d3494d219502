"""Small helpers around 2D ``numpy`` vectors."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np

Vector = np.ndarray
VectorLike = Union[np.ndarray, Sequence[float], Tuple[float, float]]


def vec2(x: float, y: float) -> Vector:
    return np.array([float(x), float(y)], dtype=float)


def as_vec2(value: VectorLike) -> Vector:
    """Return a fresh float64 copy of ``value`` with shape ``(2,)``."""

    arr = np.array(value, dtype=float).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"expected a 2D vector, got shape {arr.shape}")
    return arr


def frozen(value: Optional[Vector]) -> Optional[Vector]:
    if value is None:
        return None
    value.setflags(write=False)
    return value


def distance(a: Vector, b: Vector) -> float:
    return math.hypot(float(a[0] - b[0]), float(a[1] - b[1]))


def norm_sq(v: Vector) -> float:
    return float(np.dot(v, v))


def to_tuple(v: Vector) -> Tuple[float, float]:
    return float(v[0]), float(v[1])


__all__ = [
    "Vector",
    "VectorLike",
    "vec2",
    "as_vec2",
    "frozen",
    "distance",
    "norm_sq",
    "to_tuple",
]
