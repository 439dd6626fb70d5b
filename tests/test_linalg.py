from __future__ import annotations

import math

import numpy as np
import pytest

from uvremap.core.linalg import (
    about,
    apply_affine,
    dehomogenize,
    embed_linear,
    homogeneous,
    perpendicular,
    rotation,
    translation,
)


def test_homogeneous_round_trip_shapes():
    pts = np.array([[1.0, 2.0], [3.0, 4.0]])
    hom = homogeneous(pts)
    assert hom.shape == (2, 3)
    np.testing.assert_array_equal(hom[:, 2], [1.0, 1.0])
    np.testing.assert_allclose(dehomogenize(hom * 2.0), pts)


def test_translation_and_embed():
    np.testing.assert_allclose(apply_affine(translation(2, -1), [(0, 0), (1, 1)]), [(2, -1), (3, 0)])
    M = embed_linear([[2, 0], [0, 3]], offset=(1, 1))
    np.testing.assert_allclose(M, [[2, 0, 1], [0, 3, 1], [0, 0, 1]])


def test_rotation_about_pivot_keeps_pivot():
    R = rotation(math.pi / 2, pivot=(5, 5))
    np.testing.assert_allclose(apply_affine(R, [(5, 5), (6, 5)]), [(5, 5), (5, 6)], atol=1e-12)
    np.testing.assert_allclose(about(np.eye(3), (3, 4)), np.eye(3))


def test_perpendicular_operators():
    np.testing.assert_allclose(perpendicular((3, 1), "swap"), (1, 3))
    np.testing.assert_allclose(perpendicular((3, 1), "rotate"), (-1, 3))
    with pytest.raises(ValueError):
        perpendicular((1, 0), "nope")
