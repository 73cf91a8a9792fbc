"""Runtime orchestration: shared state, poller, navigation, and the UI loop.

``run_browser`` is imported lazily so that importing the concurrency
primitives does not pull in terminal setup.
"""

from __future__ import annotations

from .history import NavigationHistory, ViewState
from .navigation import PendingNavigation, ViewController, clamp_view
from .poller import DirectoryPoller
from .state import SharedBrowserState


def run_browser(*args, **kwargs):
    """Lazily import browser entrypoint to avoid terminal bootstrap on import."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


__all__ = [
    "DirectoryPoller",
    "NavigationHistory",
    "PendingNavigation",
    "SharedBrowserState",
    "ViewController",
    "ViewState",
    "clamp_view",
    "run_browser",
]
