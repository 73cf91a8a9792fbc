"""Per-run settings and log-file configuration.

Nothing is persisted between runs. Logs go to a file because the terminal
belongs to the UI while the browser is running.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

from .navigation import DEFAULT_CONVERGENCE_TIMEOUT_SECONDS, DEFAULT_SCROLL_MARGIN
from .poller import DEFAULT_POLL_INTERVAL_SECONDS

APP_NAME = "lazybrowser"
LOG_FILENAME = "lazybrowser.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
DEFAULT_INPUT_TIMEOUT_MS = 100

_HANDLER_MARKER = "_lazybrowser_handler"


@dataclass(frozen=True)
class BrowserSettings:
    """Runtime knobs assembled from command-line options."""

    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    convergence_timeout: float = DEFAULT_CONVERGENCE_TIMEOUT_SECONDS
    input_timeout_ms: int = DEFAULT_INPUT_TIMEOUT_MS
    scroll_margin: int = DEFAULT_SCROLL_MARGIN
    theme_name: str | None = None
    no_color: bool = False
    log_path: Path = DEFAULT_LOG_PATH
    log_level: int = logging.WARNING


def configure_logging(log_path: Path, level: int = logging.WARNING) -> logging.Handler:
    """Attach one file handler for the ``lazybrowser`` logger tree.

    Repeated calls replace the previously installed handler. An unwritable
    log location falls back to a ``NullHandler`` so startup never fails on it.
    """
    logger = logging.getLogger(APP_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)
            existing.close()

    handler: logging.Handler
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler


__all__ = [
    "APP_NAME",
    "DEFAULT_INPUT_TIMEOUT_MS",
    "DEFAULT_LOG_PATH",
    "BrowserSettings",
    "configure_logging",
]
