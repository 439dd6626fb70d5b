"""Marker discovery on RGB rasters.

A marker is any pixel whose color differs from the background. Markers are
ordered by a color-derived precedence so that the same color denotes the
same correspondence point across images, independently of where it sits.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .types import Color, Marker, Position


BACKGROUND: Color = (0, 0, 0)
_WEIGHTS = np.array([1, 256, 65536], dtype=np.int64)


def precedence(color: Sequence[int]) -> int:
    """Sort key of a color, R least significant and B most significant."""
    r, g, b = (int(c) for c in color)
    return r + 256 * g + 65536 * b


def _check_image(image: np.ndarray) -> np.ndarray:
    img = np.asarray(image)
    if img.ndim != 3 or img.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) RGB raster, got shape {img.shape}")
    if img.dtype != np.uint8:
        raise ValueError(f"Expected 8-bit channels, got dtype {img.dtype}")
    return img


def _scan_columns(
    img: np.ndarray, background: Sequence[int], x0: int, x1: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Column-major scan of columns [x0, x1). Returns (xy (N,2), keys (N,))."""
    # (W, H, 3) so that nonzero() walks all y of a column before the next x
    cols = np.transpose(img[:, x0:x1], (1, 0, 2))
    bg = np.asarray(background, dtype=img.dtype).reshape(1, 1, 3)
    mask = np.any(cols != bg, axis=2)
    xs, ys = np.nonzero(mask)
    colors = cols[xs, ys].astype(np.int64)
    keys = colors @ _WEIGHTS
    xy = np.stack([xs + x0, ys], axis=1).astype(np.int64)
    return xy, keys


def _column_chunks(width: int, workers: int) -> List[Tuple[int, int]]:
    n = max(1, min(int(workers), width))
    edges = np.linspace(0, width, n + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def scan_markers(
    image: np.ndarray, background: Sequence[int] = BACKGROUND, columns: Optional[Tuple[int, int]] = None
) -> List[Marker]:
    """All non-background pixels in discovery (column-major) order, with colors."""
    img = _check_image(image)
    x0, x1 = columns if columns is not None else (0, img.shape[1])
    xy, _ = _scan_columns(img, background, x0, x1)
    return [
        Marker(position=Position(int(x), int(y)), color=tuple(int(c) for c in img[y, x]))
        for x, y in xy
    ]


def _color_of(key: int) -> Color:
    return (key & 0xFF, (key >> 8) & 0xFF, (key >> 16) & 0xFF)


def order_markers(
    image: np.ndarray, background: Sequence[int] = BACKGROUND, workers: int = 1
) -> List[Marker]:
    """Markers sorted by ascending color precedence, colors kept.

    Equal colors keep their discovery order. With workers > 1 the columns are
    scanned in parallel; chunks are concatenated in column order before the
    global sort, so the result is identical to a single-threaded scan.
    """
    img = _check_image(image)
    width = img.shape[1]
    if width == 0 or img.shape[0] == 0:
        return []

    chunks = _column_chunks(width, workers)
    if len(chunks) > 1:
        with ThreadPoolExecutor(max_workers=len(chunks)) as ex:
            parts = list(ex.map(lambda c: _scan_columns(img, background, c[0], c[1]), chunks))
    else:
        parts = [_scan_columns(img, background, 0, width)]

    xy = np.concatenate([p[0] for p in parts], axis=0)
    keys = np.concatenate([p[1] for p in parts], axis=0)
    order = np.argsort(keys, kind="stable")
    return [
        Marker(position=Position(int(x), int(y)), color=_color_of(int(k)))
        for (x, y), k in zip(xy[order], keys[order])
    ]


def find_markers(
    image: np.ndarray, background: Sequence[int] = BACKGROUND, workers: int = 1
) -> List[Position]:
    """Marker positions sorted by ascending color precedence; colors are dropped."""
    return [m.position for m in order_markers(image, background=background, workers=workers)]


def duplicate_precedences(markers: Sequence[Marker]) -> Dict[int, List[Position]]:
    """Precedence -> positions, for colors carried by more than one marker.

    Positions keep the order of `markers`.
    """
    groups: Dict[int, List[Position]] = {}
    for m in markers:
        groups.setdefault(m.precedence, []).append(m.position)
    return {k: v for k, v in groups.items() if len(v) > 1}
