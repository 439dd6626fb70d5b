from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from uvremap.io.image import save_rgb


def make_marker_image(width: int, height: int, markers) -> np.ndarray:
    """Black RGB raster with {(x, y): (r, g, b)} pixels set."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    for (x, y), color in markers.items():
        img[y, x] = color
    return img


# source triangle (1,1),(5,1),(1,6) -> target triangle (2,2),(8,2),(2,4)
SOURCE_MARKERS = {(1, 1): (255, 0, 0), (5, 1): (0, 1, 0), (1, 6): (0, 0, 1)}
TARGET_MARKERS = {(2, 2): (255, 0, 0), (8, 2): (0, 1, 0), (2, 4): (0, 0, 1)}


@pytest.fixture
def marker_pair(tmp_path: Path):
    """Writes a source/target pair of marker PNGs and returns their paths."""
    src = save_rgb(tmp_path / "source_uv.png", make_marker_image(8, 8, SOURCE_MARKERS))
    dst = save_rgb(tmp_path / "target_uv.png", make_marker_image(10, 10, TARGET_MARKERS))
    return src, dst
