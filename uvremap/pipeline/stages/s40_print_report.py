from __future__ import annotations

import logging

from ..base import Bundle, Stage, register
from ...io.report import format_markers, format_matrix

logger = logging.getLogger(__name__)

_FACTORS = (
    ("Translation", "translation"),
    ("Rotation", "rotation"),
    ("Change of basis", "change_basis"),
    ("Scale/shear", "scale_shear"),
)


@register("s40_print_report")
class PrintReport(Stage):
    """Print the ordered markers, the intermediate factors and the final matrix."""

    required_inputs = ["markers.source", "markers.target", "solution"]
    produces = []
    STAGE_VERSION = "1.0.0"

    def __init__(self, max_markers: int = -1, echo: bool = True, **cfg):
        super().__init__(max_markers=max_markers, echo=echo, **cfg)
        self.max_markers = int(max_markers)
        self.echo = bool(echo)

    def render(self, B: Bundle) -> str:
        blocks = [format_markers(label, B.markers[label], self.max_markers) for label in ("source", "target")]
        for title, attr in _FACTORS:
            blocks.append(format_matrix(title, getattr(B.solution, attr)))
        blocks.append(format_matrix("Transform", B.solution.matrix))
        return "\n".join(blocks)

    def run(self, B: Bundle) -> Bundle:
        text = self.render(B)
        if self.echo:
            print(text)
        else:
            logger.info("\n%s", text)
        return B
