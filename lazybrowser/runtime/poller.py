"""Background worker that keeps the shared snapshot in sync with the target path."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from ..listing import DirectorySnapshot, build_directory_snapshot
from .state import SharedBrowserState

LOGGER = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 0.1

POLLER_IDLE = "idle"
POLLER_SCANNING = "scanning"
POLLER_STOPPED = "stopped"


class DirectoryPoller:
    """Single-threaded rescan loop: wait for a tick, scan the target, publish.

    Reading the target and publishing the result are separate critical
    sections, so a path requested mid-scan is picked up by the next cycle.
    A new path request cuts the current wait short.
    """

    def __init__(
        self,
        state: SharedBrowserState,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        build_snapshot: Callable[[Path], DirectorySnapshot] = build_directory_snapshot,
    ) -> None:
        self._state = state
        self._interval = interval
        self._build_snapshot = build_snapshot
        self._status = POLLER_IDLE
        self._status_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def status(self) -> str:
        with self._status_lock:
            return self._status

    def _set_status(self, status: str) -> None:
        with self._status_lock:
            self._status = status

    def scan_once(self) -> DirectorySnapshot:
        """Run one scanning cycle synchronously and publish its result."""
        self._set_status(POLLER_SCANNING)
        try:
            target, request_id = self._state.read_target()
            try:
                snapshot = self._build_snapshot(target)
            except Exception:
                LOGGER.exception("Snapshot build failed for %s", target)
                snapshot = DirectorySnapshot.empty(target)
            self._state.publish(snapshot, target, request_id)
            return snapshot
        finally:
            self._set_status(POLLER_IDLE)

    def _run(self) -> None:
        LOGGER.debug("Directory poller started (interval=%.3fs)", self._interval)
        seen_request_id: int | None = -1
        while True:
            seen_request_id = self._state.wait_for_path_request(seen_request_id, self._interval)
            if seen_request_id is None:
                break
            self.scan_once()
        self._set_status(POLLER_STOPPED)
        LOGGER.debug("Directory poller stopped")

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run,
            name="lazybrowser-poller",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float | None = 1.0) -> bool:
        """Close the shared state and wait for the worker; return whether it exited."""
        self._state.close()
        thread = self._thread
        if thread is None:
            self._set_status(POLLER_STOPPED)
            return True
        thread.join(timeout)
        alive = thread.is_alive()
        if alive:
            LOGGER.warning("Directory poller did not stop within %.1fs", timeout or 0.0)
        return not alive


__all__ = [
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "POLLER_IDLE",
    "POLLER_SCANNING",
    "POLLER_STOPPED",
    "DirectoryPoller",
]
