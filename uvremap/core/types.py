from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Sequence, Tuple

import numpy as np

from .linalg import apply_affine


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Marker:
    """A non-background pixel; color is only kept until markers are ordered."""

    position: Position
    color: Color

    @property
    def precedence(self) -> int:
        r, g, b = self.color
        return int(r) + 256 * int(g) + 65536 * int(b)


@dataclass
class Triangle:
    vertices: np.ndarray  # (3,2) float64
    label: str = ""

    def __post_init__(self):
        v = np.asarray(self.vertices, dtype=np.float64)
        if v.shape != (3, 2):
            raise ValueError(f"Triangle '{self.label}': expected 3 points of 2 coords, got shape {v.shape}")
        self.vertices = v

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]], label: str = "") -> "Triangle":
        return cls(vertices=np.asarray([tuple(p) for p in points], dtype=np.float64), label=label)

    def vertex(self, i: int) -> np.ndarray:
        return self.vertices[i]

    def as_array(self) -> np.ndarray:
        return self.vertices.copy()


@dataclass
class AffineSolution:
    """Factors of the solved transform, each a 3x3 homogeneous matrix.

    matrix == unchange_basis @ scale_shear @ change_basis @ rotation @ translation
    """

    translation: np.ndarray
    rotation: np.ndarray
    change_basis: np.ndarray
    scale_shear: np.ndarray
    unchange_basis: np.ndarray
    matrix: np.ndarray
    angle: float = 0.0
    perpendicular: str = "swap"
    extras: Dict[str, Any] = field(default_factory=dict)

    def apply(self, points) -> np.ndarray:
        return apply_affine(self.matrix, points)

    def factors(self) -> Dict[str, np.ndarray]:
        return {
            "translation": self.translation,
            "rotation": self.rotation,
            "change_basis": self.change_basis,
            "scale_shear": self.scale_shear,
            "unchange_basis": self.unchange_basis,
        }

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {k: np.asarray(v, dtype=float).tolist() for k, v in self.factors().items()}
        out["matrix"] = np.asarray(self.matrix, dtype=float).tolist()
        out["angle_rad"] = float(self.angle)
        out["perpendicular"] = self.perpendicular
        return out
