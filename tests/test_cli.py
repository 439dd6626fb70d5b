from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from omegaconf import OmegaConf

from uvremap import __version__
from uvremap.app.bootstrap import setup_logging
from uvremap.app.main import load_config, main, run
from uvremap.io.image import save_rgb

from .conftest import make_marker_image


def test_config_defaults_and_overrides(marker_pair):
    src, dst = marker_pair
    cfg = load_config(str(src), str(dst), ["solver.perpendicular=rotate", "locator.workers=4"])
    assert cfg.source == str(src)
    assert cfg.target == str(dst)
    assert cfg.solver.perpendicular == "rotate"
    assert cfg.locator.workers == 4
    assert list(cfg.triangle.indices) == [0, 1, 2]
    assert cfg.export.path is None
    assert len(cfg.pipeline.stages) == 6


def test_run_returns_solved_bundle(marker_pair):
    src, dst = marker_pair
    B = run(load_config(str(src), str(dst), ["report.max_markers=2"]))
    np.testing.assert_allclose(B.solution.apply(B.triangles["source"].vertices), B.triangles["target"].vertices, atol=1e-9)


def test_main_success(marker_pair, capsys):
    src, dst = marker_pair
    assert main([str(src), str(dst)]) == 0
    out = capsys.readouterr().out
    assert "Transform:" in out
    assert "target markers [3]" in out


def test_main_export_override(marker_pair, tmp_path: Path):
    src, dst = marker_pair
    out = tmp_path / "summary.yaml"
    assert main([str(src), str(dst), f"export.path={out}"]) == 0
    assert out.exists()
    assert OmegaConf.load(out).solution.perpendicular == "swap"


def test_main_reports_failures_with_exit_code(tmp_path: Path, marker_pair, caplog):
    src, _ = marker_pair
    few = save_rgb(tmp_path / "few.png", make_marker_image(4, 4, {(1, 1): (1, 0, 0)}))
    with caplog.at_level(logging.ERROR):
        assert main([str(src), str(few)]) == 1
    assert "found 1" in caplog.text

    assert main([str(src), str(tmp_path / "missing.png")]) == 1


def test_version_and_usage(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--version"])
    assert ei.value.code == 0
    assert __version__ in capsys.readouterr().out

    with pytest.raises(SystemExit) as ei:
        main(["only-one-path.png"])
    assert ei.value.code == 2


@pytest.mark.parametrize("override", ["solver.nonexistent_key=3", "triangle.indices=[0,1]"])
def test_bad_config_is_a_usage_error(marker_pair, override, capsys):
    src, dst = marker_pair
    with pytest.raises(SystemExit) as ei:
        main([str(src), str(dst), override])
    assert ei.value.code == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_setup_logging_file_handler(tmp_path: Path):
    log_file = tmp_path / "logs" / "uvremap.log"
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging(level="DEBUG", file_path=str(log_file))
        logging.getLogger("uvremap.test").debug("hello from test")
        for h in root.handlers:
            h.flush()
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()


def test_setup_logging_twice_keeps_one_file_handler(tmp_path: Path):
    log_file = tmp_path / "uvremap.log"
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging(level="INFO", file_path=str(log_file))
        setup_logging(level="INFO", file_path=str(log_file))
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        logging.getLogger("uvremap.test").info("written once")
        added[0].flush()
        assert log_file.read_text(encoding="utf-8").count("written once") == 1
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
