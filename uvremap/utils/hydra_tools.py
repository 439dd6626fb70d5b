from __future__ import annotations

from typing import List

from hydra.utils import instantiate

from ..pipeline.base import Stage


def instantiate_stages(stage_cfg_list) -> List[Stage]:
    stages: List[Stage] = []
    for sc in stage_cfg_list:
        stage = instantiate(sc)
        if not isinstance(stage, Stage):
            raise TypeError(f"Configured stage {sc.get('_target_')!r} is not a pipeline Stage")
        stages.append(stage)
    return stages
