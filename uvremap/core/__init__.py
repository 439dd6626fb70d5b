from .affine import solve_affine
from .markers import find_markers, precedence
from .types import AffineSolution, Marker, Position, Triangle

__all__ = [
    "AffineSolution",
    "Marker",
    "Position",
    "Triangle",
    "find_markers",
    "precedence",
    "solve_affine",
]
