"""Logging setup.

The TUI owns the terminal, so log records go to a file instead of a
stream handler.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from jobtracker.config.schema import JobTrackerConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: JobTrackerConfig) -> Path:
    """Attach a file handler to the ``jobtracker`` logger.

    The level comes from ``$JOBTRACKER_LOG_LEVEL`` when set, otherwise from
    ``[logging] level``. Calling this again replaces the previous handler.

    Returns:
        The log file path.
    """
    log_file = config.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    level_name = os.environ.get("JOBTRACKER_LOG_LEVEL", config.logging.level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger("jobtracker")
    for handler in list(root.handlers):
        if getattr(handler, "_jobtracker", False):
            root.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._jobtracker = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False

    root.info("Logging to %s at %s", log_file, logging.getLevelName(level))
    return log_file
