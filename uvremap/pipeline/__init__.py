from .base import REGISTRY, Bundle, Stage, register
from .runner import run_pipeline

__all__ = ["REGISTRY", "Bundle", "Stage", "register", "run_pipeline"]
