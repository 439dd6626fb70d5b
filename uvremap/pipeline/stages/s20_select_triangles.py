from __future__ import annotations

from typing import Sequence

from ..base import Bundle, Stage, register
from ...core.errors import InsufficientMarkersError
from ...core.types import Triangle


@register("s20_select_triangles")
class SelectTriangles(Stage):
    """Pick the correspondence triangle out of each ordered marker list."""

    required_inputs = ["markers.source", "markers.target"]
    produces = ["triangles.source", "triangles.target"]
    STAGE_VERSION = "1.0.0"

    def __init__(self, indices: Sequence[int] = (0, 1, 2), **cfg):
        super().__init__(indices=indices, **cfg)
        idx = [int(i) for i in indices]
        if len(idx) != 3 or len(set(idx)) != 3 or min(idx) < 0:
            raise ValueError(f"SelectTriangles: indices must be 3 distinct non-negative ints, got {list(indices)}")
        self.indices = idx

    def run(self, B: Bundle) -> Bundle:
        required = max(self.indices) + 1
        for label in ("source", "target"):
            markers = B.markers[label]
            if len(markers) < required:
                raise InsufficientMarkersError(label, len(markers), required)
            B.triangles[label] = Triangle.from_points([markers[i] for i in self.indices], label=label)
        B.report["triangles"] = {
            "indices": list(self.indices),
            **{k: t.vertices.tolist() for k, t in B.triangles.items()},
        }
        return B
