"""Interactive browser bootstrap.

Wires the shared state, background poller, navigation controller and
terminal together, then runs the main loop. The poller is always stopped
and the terminal always restored, whatever way the loop exits.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..launcher import open_with_default_application
from ..ui_theme import resolve_theme
from .config import BrowserSettings, configure_logging
from .history import NavigationHistory
from .loop import RuntimeLoopTiming, run_main_loop
from .navigation import ViewController
from .poller import DirectoryPoller
from .state import SharedBrowserState
from .terminal import TerminalController

LOGGER = logging.getLogger(__name__)


def run_browser(path: Path, settings: BrowserSettings | None = None) -> None:
    """Browse ``path`` interactively until the user quits."""
    settings = settings or BrowserSettings()
    configure_logging(settings.log_path, settings.log_level)
    start_path = path.resolve()
    LOGGER.info("Starting browser in %s", start_path)

    state = SharedBrowserState(start_path)
    poller = DirectoryPoller(state, interval=settings.poll_interval)
    history = NavigationHistory()
    controller = ViewController(
        state,
        history,
        open_file=open_with_default_application,
        convergence_timeout=settings.convergence_timeout,
        scroll_margin=settings.scroll_margin,
    )
    theme = resolve_theme(settings.theme_name, no_color=settings.no_color)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    poller.start()
    try:
        controller.start()
        run_main_loop(
            controller,
            terminal,
            stdin_fd,
            RuntimeLoopTiming(input_timeout_ms=settings.input_timeout_ms),
            theme=theme,
        )
    finally:
        poller.stop()
        LOGGER.info("Browser exited; %d directories visited", len(history))


__all__ = ["run_browser"]
