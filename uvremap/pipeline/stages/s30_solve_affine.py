from __future__ import annotations

import logging

from ..base import Bundle, Stage, register
from ...core.affine import solve_affine

logger = logging.getLogger(__name__)


@register("s30_solve_affine")
class SolveAffine(Stage):
    required_inputs = ["triangles.source", "triangles.target"]
    produces = ["solution", "report.solve"]
    STAGE_VERSION = "1.0.0"

    def __init__(self, perpendicular: str = "swap", eps: float = 1e-9, **cfg):
        super().__init__(perpendicular=perpendicular, eps=eps, **cfg)
        self.perpendicular = str(perpendicular)
        self.eps = float(eps)

    def run(self, B: Bundle) -> Bundle:
        sol = solve_affine(
            B.triangles["source"], B.triangles["target"], perpendicular=self.perpendicular, eps=self.eps
        )
        B.solution = sol
        residual = float(sol.extras.get("max_residual", 0.0))
        logger.info("Solved affine transform (max vertex residual %.3g px)", residual)
        B.report["solve"] = {
            "max_residual_px": residual,
            "angle_rad": float(sol.angle),
            "perpendicular": sol.perpendicular,
        }
        return B
