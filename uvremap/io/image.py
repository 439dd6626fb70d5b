# Image I/O via OpenCV; arrays handed to the rest of the package are RGB.
from pathlib import Path

import cv2
import numpy as np

from ..core.errors import ImageDecodeError


def load_rgb(path) -> np.ndarray:
    """Decode an image file to an (H, W, 3) uint8 RGB array. Alpha is dropped."""
    p = Path(path)
    if not p.is_file():
        raise ImageDecodeError(str(path), "file not found")
    try:
        bgr = cv2.imread(str(p), cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ImageDecodeError(str(path), str(e)) from e
    if bgr is None:
        raise ImageDecodeError(str(path))
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def save_rgb(path, image: np.ndarray) -> Path:
    """Write an RGB array losslessly (format from the suffix), creating parent dirs."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    ok = cv2.imwrite(str(p), cv2.cvtColor(np.asarray(image, dtype=np.uint8), cv2.COLOR_RGB2BGR))
    if not ok:
        raise OSError(f"Failed to write image: {p}")
    return p
