"""Exact affine solve between two ordered triangles.

The map is built from independently derived factors, applied right to left:

    M = U @ S @ C @ R @ T

T moves source vertex 0 onto target vertex 0, R turns the source's first
edge onto the direction of the target's first edge (about the moved anchor),
C expresses coordinates in the frame spanned by the target's first edge and
its perpendicular, S is the scale/shear solved in that frame and U leaves the
frame again.
"""

from __future__ import annotations

import logging
import math
from typing import Union

import numpy as np

from .errors import DegenerateTriangleError
from .linalg import apply_affine, embed_linear, perpendicular as perp_of, rotation, translation
from .types import AffineSolution, Triangle

logger = logging.getLogger(__name__)

TriangleLike = Union[Triangle, np.ndarray, list, tuple]


def _vertices(tri: TriangleLike, label: str) -> np.ndarray:
    if isinstance(tri, Triangle):
        return tri.vertices
    return Triangle(vertices=tri, label=label).vertices


def _check_finite(v: np.ndarray, label: str) -> None:
    if not np.all(np.isfinite(v)):
        raise DegenerateTriangleError(label, (0, 1, 2), "vertex coordinates must be finite")


def solve_affine(
    source: TriangleLike,
    target: TriangleLike,
    perpendicular: str = "swap",
    eps: float = 1e-9,
) -> AffineSolution:
    """Solve the 3x3 matrix M with M @ (s_i, 1) == (t_i, 1) for i in 0..2.

    perpendicular selects the operator that builds the second basis vector
    from the target edge: "swap" ([[0,1],[1,0]]) or "rotate" ([[0,-1],[1,0]]).
    The final matrix does not depend on it; the scale/shear factor does.
    """
    src = _vertices(source, "source")
    dst = _vertices(target, "target")
    _check_finite(src, "source")
    _check_finite(dst, "target")
    s0, s1, s2 = src
    d0, d1, d2 = dst

    e_src = s1 - s0
    e1 = d1 - d0
    if float(np.hypot(*e_src)) <= eps:
        raise DegenerateTriangleError("source", (0, 1), "vertices 0 and 1 coincide")
    if float(np.hypot(*e1)) <= eps:
        raise DegenerateTriangleError("target", (0, 1), "vertices 0 and 1 coincide")

    # 1. translation
    T = translation(*(d0 - s0))

    # 2. rotation of the first edge, about the translated anchor
    angle = math.atan2(e1[1], e1[0]) - math.atan2(e_src[1], e_src[0])
    R = rotation(angle, pivot=d0)

    # 3. change of basis into the target edge frame
    B = np.column_stack([e1, perp_of(e1, perpendicular)])
    det = float(np.linalg.det(B))
    if abs(det) <= eps * float(e1 @ e1):
        reason = f"edge {e1.tolist()} and its '{perpendicular}' perpendicular do not span the plane"
        if perpendicular == "swap":
            reason += "; try solver.perpendicular=rotate"
        raise DegenerateTriangleError("target", (0, 1), reason)
    B_inv = np.linalg.inv(B)
    C = embed_linear(B_inv, offset=-B_inv @ d0)
    U = embed_linear(B, offset=d0)

    # 4. vertices in the edge frame; target vertices are already in place
    s1f, s2f = apply_affine(C @ R @ T, np.stack([s1, s2]))
    t1f, t2f = apply_affine(C, np.stack([d1, d2]))

    if abs(s1f[0]) <= eps:
        raise DegenerateTriangleError("source", (0, 1), "edge 0->1 has no extent along the target edge")
    if abs(s2f[1]) <= eps:
        raise DegenerateTriangleError("source", (0, 1, 2), "vertices are collinear")
    if abs(t2f[1]) <= eps:
        raise DegenerateTriangleError("target", (0, 1, 2), "vertices are collinear")

    # 5. scale / shear
    sx = t1f[0] / s1f[0]
    sy = t2f[1] / s2f[1]
    shear = (t2f[0] - s2f[0] * sx) / s2f[1]
    S = embed_linear(np.array([[sx, shear], [0.0, sy]]))

    # 6. composition
    M = U @ S @ C @ R @ T
    if not np.all(np.isfinite(M)):
        raise DegenerateTriangleError("source", (0, 1, 2), "solution is not finite")

    residual = float(np.max(np.abs(apply_affine(M, src) - dst)))
    logger.debug("solve_affine: angle=%.6f rad, sx=%.6g, sy=%.6g, shear=%.6g, residual=%.3g", angle, sx, sy, shear, residual)

    return AffineSolution(
        translation=T,
        rotation=R,
        change_basis=C,
        scale_shear=S,
        unchange_basis=U,
        matrix=M,
        angle=float(angle),
        perpendicular=perpendicular,
        extras={"max_residual": residual},
    )
