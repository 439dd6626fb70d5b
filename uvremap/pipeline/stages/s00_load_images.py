from __future__ import annotations

import logging

from ..base import Bundle, Stage, register
from ...io.image import load_rgb

logger = logging.getLogger(__name__)


@register("s00_load_images")
class LoadImages(Stage):
    """Decode the source and target UV marker images to RGB8."""

    required_inputs = ["source_path", "target_path"]
    produces = ["images.source", "images.target"]
    STAGE_VERSION = "1.0.0"

    def run(self, B: Bundle) -> Bundle:
        for label, path in (("source", B.source_path), ("target", B.target_path)):
            img = load_rgb(path)
            h, w = img.shape[:2]
            logger.info("Loaded %s image %s (%dx%d)", label, path, w, h)
            B.images[label] = img
            B.report.setdefault("images", {})[label] = {"path": str(path), "width": int(w), "height": int(h)}
        return B
