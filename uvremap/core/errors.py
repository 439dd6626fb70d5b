from __future__ import annotations

from typing import Sequence


class RemapError(Exception):
    """Base class for failures of a remap run."""


class ImageDecodeError(RemapError):
    def __init__(self, path: str, reason: str = "not a decodable image"):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot decode image '{path}': {reason}")


class InsufficientMarkersError(RemapError):
    def __init__(self, label: str, found: int, required: int = 3):
        self.label = label
        self.found = int(found)
        self.required = int(required)
        super().__init__(f"{label} image: need at least {required} markers, found {found}")


class DegenerateTriangleError(RemapError):
    def __init__(self, label: str, vertices: Sequence[int], reason: str):
        self.label = label
        self.vertices = tuple(int(v) for v in vertices)
        self.reason = reason
        idx = ",".join(str(v) for v in self.vertices)
        super().__init__(f"Degenerate {label} triangle (vertices {idx}): {reason}")
