"""Homogeneous 2D helpers used by the affine solver."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np


PERPENDICULAR_OPERATORS = {
    # swaps the axes: a reflection composed with a quarter turn
    "swap": np.array([[0.0, 1.0], [1.0, 0.0]]),
    # proper +90 degree rotation
    "rotate": np.array([[0.0, -1.0], [1.0, 0.0]]),
}


def homogeneous(points) -> np.ndarray:
    """(N,2) -> (N,3) with a trailing column of ones."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return np.hstack([pts, np.ones((pts.shape[0], 1), dtype=np.float64)])


def dehomogenize(points) -> np.ndarray:
    hom = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    return hom[:, :2] / hom[:, 2:3]


def translation(dx: float, dy: float) -> np.ndarray:
    M = np.eye(3, dtype=np.float64)
    M[0, 2] = float(dx)
    M[1, 2] = float(dy)
    return M


def embed_linear(A: np.ndarray, offset: Optional[Sequence[float]] = None) -> np.ndarray:
    """Pad a 2x2 linear map to 3x3, optionally with a translation column."""
    M = np.eye(3, dtype=np.float64)
    M[:2, :2] = np.asarray(A, dtype=np.float64).reshape(2, 2)
    if offset is not None:
        M[:2, 2] = np.asarray(offset, dtype=np.float64).reshape(2)
    return M


def about(M: np.ndarray, pivot: Sequence[float]) -> np.ndarray:
    """Conjugate M so that it acts about `pivot` instead of the origin."""
    px, py = float(pivot[0]), float(pivot[1])
    return translation(px, py) @ M @ translation(-px, -py)


def rotation(angle: float, pivot: Optional[Sequence[float]] = None) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    R = embed_linear(np.array([[c, -s], [s, c]]))
    if pivot is None:
        return R
    return about(R, pivot)


def perpendicular(vec, mode: str = "swap") -> np.ndarray:
    try:
        op = PERPENDICULAR_OPERATORS[mode]
    except KeyError:
        raise ValueError(f"Unknown perpendicular mode: {mode!r} (expected one of {sorted(PERPENDICULAR_OPERATORS)})")
    return op @ np.asarray(vec, dtype=np.float64).reshape(2)


def apply_affine(M: np.ndarray, points) -> np.ndarray:
    """Apply a 3x3 affine matrix to (N,2) points and return (N,2)."""
    hom = homogeneous(points)
    prj = (np.asarray(M, dtype=np.float64) @ hom.T).T
    return dehomogenize(prj)
