from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_APP_PREFIXES = ("core.", "storage.", "services.", "controller.", "app.", "__main__")


class _ThirdPartyFilter(logging.Filter):
    """Keep our own loggers; let urllib3/requests and friends through only on ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(_APP_PREFIXES):
            return True
        if name == "py.warnings":
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(level: str | int = "INFO", log_dir: Optional[str | Path] = None) -> None:
    """
    Configure the root logger once, before the first request.

    - stderr handler at `level`, third-party noise filtered
    - optional file handler (DEBUG, unfiltered) under `log_dir`/join.log
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ThirdPartyFilter())
    root.addHandler(ch)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "join.log"), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
