from __future__ import annotations

import logging
from typing import Optional

from ..base import Bundle, Stage, register
from ...io.report import export_summary

logger = logging.getLogger(__name__)


@register("s50_export")
class Export(Stage):
    """Save a YAML summary of the run when a path is configured."""

    required_inputs = ["solution", "report.solve"]
    produces = []
    STAGE_VERSION = "1.0.0"

    def __init__(self, path: Optional[str] = None, **cfg):
        super().__init__(path=path, **cfg)
        self.path = path

    def run(self, B: Bundle) -> Bundle:
        if not self.path:
            return B
        out = export_summary(self.path, B)
        B.report["export"] = {"path": str(out)}
        logger.info("Wrote summary to %s", out)
        return B
