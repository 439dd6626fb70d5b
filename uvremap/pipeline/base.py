from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

import numpy as np

from ..core.types import AffineSolution, Position, Triangle


PIPELINE_VERSION: str = "uvremap@1.0.0"


@dataclass
class Bundle:
    source_path: Optional[str] = None
    target_path: Optional[str] = None
    # label ("source" / "target") -> RGB raster
    images: Dict[str, np.ndarray] = field(default_factory=dict)
    # label -> positions ordered by color precedence
    markers: Dict[str, List[Position]] = field(default_factory=dict)
    triangles: Dict[str, Triangle] = field(default_factory=dict)
    solution: Optional[AffineSolution] = None
    report: Dict[str, Any] = field(default_factory=dict)


def _has_attr_path(obj: Any, path: str) -> bool:
    # Dotted path under Bundle attributes, including dict keys (e.g. images.source)
    cur: Any = obj
    for p in path.split("."):
        if isinstance(cur, dict):
            if p not in cur:
                return False
            cur = cur[p]
        else:
            if not hasattr(cur, p):
                return False
            cur = getattr(cur, p)
    return cur is not None


def ensure_versions(B: Bundle) -> None:
    vers = B.report.get("versions") or {}
    vers.setdefault("pipeline_version", PIPELINE_VERSION)
    vers.setdefault("stage_versions", [])
    B.report["versions"] = vers


class Stage:
    """Base class for pipeline stages with contract enforcement.

    Each stage may declare:
      - required_inputs: dotted Bundle paths that must be set before run (e.g. "images.source")
      - produces: dotted paths expected after run (e.g. "solution", "report.solve")
      - STAGE_VERSION: semantic version string
      - STAGE_NAME: set via @register or defaults to class name
    """

    required_inputs: List[str] = []
    produces: List[str] = []
    STAGE_VERSION: str = "1.0.0"
    STAGE_NAME: str = ""

    def __init__(self, **cfg):
        self.cfg = cfg

    @property
    def name(self) -> str:
        return self.STAGE_NAME or self.__class__.__name__

    def __call__(self, B: Bundle) -> Bundle:
        ensure_versions(B)
        self.validate_required_inputs(B)
        B = self.run(B)
        self.validate_produces(B)
        B.report["versions"]["stage_versions"].append({"name": self.name, "version": self.STAGE_VERSION})
        return B

    def run(self, B: Bundle) -> Bundle:  # pragma: no cover - interface
        raise NotImplementedError

    def validate_required_inputs(self, B: Bundle) -> None:
        missing = [r for r in self.required_inputs if not _has_attr_path(B, r)]
        if missing:
            raise ValueError(f"Stage '{self.name}' precondition failed: Bundle missing {missing}")

    def validate_produces(self, B: Bundle) -> None:
        missing = [p for p in self.produces if not _has_attr_path(B, p)]
        if missing:
            raise ValueError(f"Stage '{self.name}' postcondition failed: did not produce {missing}")


REGISTRY: Dict[str, Type[Stage]] = {}


def register(name: str) -> Callable[[Type[Stage]], Type[Stage]]:
    def _wrap(cls: Type[Stage]) -> Type[Stage]:
        cls.STAGE_NAME = name
        REGISTRY[name] = cls
        return cls

    return _wrap
