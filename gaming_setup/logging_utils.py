from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "gaming-setup.log"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging for one gaming-setup run.

    The log file is the operator record of the run: every CMD line from
    run_cmd, each skipped package with its reason, step warnings and the
    final summary. The console handler shows the same lines live.

    Notes:
    - /var/log is only writable as root. A dry run as a normal user falls
      back to ./gaming-setup.log and still reports the intended path.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_gaming_setup_configured", False):
        return getattr(logger, "_gaming_setup_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_gaming_setup_configured", True)
    setattr(logger, "_gaming_setup_handlers", handlers)
    setattr(logger, "_gaming_setup_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Drop handlers installed by configure_logging() (used between runs in tests)."""

    logger = logging.getLogger()
    if not getattr(logger, "_gaming_setup_configured", False):
        return
    for h in getattr(logger, "_gaming_setup_handlers", []):
        logger.removeHandler(h)
        h.close()
    setattr(logger, "_gaming_setup_handlers", [])
    setattr(logger, "_gaming_setup_configured", False)
