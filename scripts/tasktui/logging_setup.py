from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasktui",
    level: int | str = logging.INFO,
) -> Path:
    """
    Send all logs to <log_dir>/tasktui.log.

    There is no console handler: the terminal belongs to the TUI while it
    runs. Call this ONCE, before the app starts. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "tasktui.log"

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
