import logging
from pathlib import Path


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _has_file_handler(root: logging.Logger, path: Path) -> bool:
    target = str(path.resolve())
    return any(isinstance(h, logging.FileHandler) and h.baseFilename == target for h in root.handlers)


def setup_logging(level: str = "INFO", file_path: str | None = None):
    """Set the root level and format; mirror records to file_path when given.

    Safe to call more than once: an existing handler for the same log file is reused.
    """
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    root.setLevel(lvl)

    if not file_path:
        return
    log_path = Path(file_path)
    if _has_file_handler(root, log_path):
        return
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("Could not log to %s: %s", file_path, e)
        return
    handler.setLevel(lvl)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
