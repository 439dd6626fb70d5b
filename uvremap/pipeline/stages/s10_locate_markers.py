from __future__ import annotations

import logging
from typing import Sequence

from ..base import Bundle, Stage, register
from ...core.markers import BACKGROUND, duplicate_precedences, order_markers

logger = logging.getLogger(__name__)


@register("s10_locate_markers")
class LocateMarkers(Stage):
    required_inputs = ["images.source", "images.target"]
    produces = ["markers.source", "markers.target", "report.locate"]
    STAGE_VERSION = "1.0.0"

    def __init__(self, background: Sequence[int] = BACKGROUND, workers: int = 1, **cfg):
        super().__init__(background=background, workers=workers, **cfg)
        self.background = tuple(int(c) for c in background)
        if len(self.background) != 3:
            raise ValueError(f"LocateMarkers: background must be an RGB triple, got {list(background)}")
        self.workers = int(workers)

    def run(self, B: Bundle) -> Bundle:
        B.report.setdefault("locate", {})
        for label in ("source", "target"):
            img = B.images[label]
            ordered = order_markers(img, background=self.background, workers=self.workers)
            positions = [m.position for m in ordered]
            B.markers[label] = positions

            shared = duplicate_precedences(ordered)
            for key, where in sorted(shared.items()):
                # same color on several pixels: order between them is scan order only
                logger.warning(
                    "%s image: precedence %d used by %d pixels at %s",
                    label,
                    key,
                    len(where),
                    ", ".join(f"({p.x}, {p.y})" for p in where),
                )
            logger.info("%s image: %d markers", label, len(positions))
            B.report["locate"][label] = {
                "count": len(positions),
                "shared_colors": [[k, [list(p) for p in v]] for k, v in sorted(shared.items())],
            }
        return B
