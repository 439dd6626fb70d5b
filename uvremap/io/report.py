from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np
from omegaconf import OmegaConf


def _round_list(arr, nd: int = 6):
    if arr is None:
        return None
    a = np.asarray(arr, dtype=float)
    return np.round(a, nd).tolist()


def format_markers(label: str, positions: Sequence, limit: Optional[int] = None) -> str:
    pts = [tuple(int(c) for c in p) for p in positions]
    shown = pts if limit is None or limit < 0 else pts[:limit]
    parts = [f"({x}, {y})" for x, y in shown]
    if len(shown) < len(pts):
        parts.append(f"... (+{len(pts) - len(shown)} more)")
    body = ", ".join(parts)
    return f"{label} markers [{len(pts)}]: [{body}]"


def format_matrix(name: str, M, precision: int = 6) -> str:
    a = np.asarray(M, dtype=float)
    rows = np.array2string(a, precision=precision, suppress_small=True, separator=", ")
    lines = rows.splitlines()
    return "\n".join([f"{name}:"] + ["  " + ln for ln in lines])


def build_summary(B) -> Dict[str, Any]:
    """Plain-container summary of a finished bundle."""
    vers = B.report.get("versions", {})
    sol = B.solution
    summary: Dict[str, Any] = {
        "source": B.source_path,
        "target": B.target_path,
        "n_markers": {k: len(v) for k, v in (B.markers or {}).items()},
        "triangles": {k: _round_list(t.vertices) for k, t in (B.triangles or {}).items()},
        "solution": None,
        "report": deepcopy({k: v for k, v in B.report.items() if k != "versions"}),
        "pipeline_version": vers.get("pipeline_version", ""),
        "stage_versions": vers.get("stage_versions", []),
    }
    if sol is not None:
        summary["solution"] = {
            **{k: _round_list(v) for k, v in sol.factors().items()},
            "matrix": _round_list(sol.matrix),
            "angle_rad": float(sol.angle),
            "perpendicular": sol.perpendicular,
        }
    return summary


def export_summary(path, B) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config=OmegaConf.create(build_summary(B)), f=p)
    return p
