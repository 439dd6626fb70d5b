from __future__ import annotations

import logging
from typing import List

from .base import Bundle, Stage, ensure_versions

logger = logging.getLogger(__name__)


def run_pipeline(B: Bundle, stages: List[Stage]) -> Bundle:
    """Run stages in order. The first failure propagates; nothing is retried."""
    ensure_versions(B)
    for st in stages:
        logger.debug("Running stage %s", st.name)
        B = st(B)
    return B
