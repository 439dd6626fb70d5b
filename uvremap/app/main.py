"""Command-line entry point: uvremap INPUT OUTPUT [key=value ...]"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from hydra import compose, initialize_config_module
from hydra.errors import HydraException
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .. import __version__
from ..core.errors import RemapError
from ..pipeline.base import Bundle, Stage
from ..pipeline.runner import run_pipeline
from ..utils.hydra_tools import instantiate_stages
from .bootstrap import setup_logging

logger = logging.getLogger(__name__)

CONFIG_MODULE = "uvremap.configs"
CONFIG_NAME = "remap"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="uvremap",
        description="Derive the affine transform mapping the marker triangle of one UV layout onto another.",
    )
    ap.add_argument("input", help="image with the markers of the UV layout the texture was authored for")
    ap.add_argument("output", help="image with the matching markers of the new UV layout")
    ap.add_argument(
        "overrides",
        nargs="*",
        metavar="key=value",
        help="config overrides, e.g. solver.perpendicular=rotate export.path=out/remap.yaml",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def load_config(source: str, target: str, overrides: Optional[List[str]] = None) -> DictConfig:
    with initialize_config_module(config_module=CONFIG_MODULE, version_base=None):
        cfg = compose(config_name=CONFIG_NAME, overrides=list(overrides or []))
    # Set after composing so arbitrary file names bypass the override grammar
    cfg.source = str(source)
    cfg.target = str(target)
    return cfg


def run(cfg: DictConfig, stages: Optional[List[Stage]] = None) -> Bundle:
    if stages is None:
        stages = instantiate_stages(cfg.pipeline.stages)
    logger.info("Pipeline initialized with %d stages.", len(stages))
    B = Bundle(source_path=str(cfg.source), target_path=str(cfg.target))
    return run_pipeline(B, stages)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = load_config(args.input, args.output, args.overrides)
        stages = instantiate_stages(cfg.pipeline.stages)
    except (HydraException, OmegaConfBaseException, TypeError) as e:
        parser.error(f"invalid configuration: {e}")
    setup_logging(level=str(cfg.logging.level), file_path=cfg.logging.file)
    logger.debug("Config:\n%s", OmegaConf.to_yaml(cfg))

    try:
        run(cfg, stages)
    except RemapError as e:
        cause = f" (caused by: {e.__cause__})" if e.__cause__ is not None else ""
        logger.error("%s%s", e, cause)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
