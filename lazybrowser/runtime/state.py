"""Thread-safe directory state shared by the poller and the UI loop.

The UI loop is the only writer of the target path; the poller is the only
writer of the snapshot and the acknowledgement. Every accessor takes the
single condition lock, so readers always see whole values: a snapshot is
swapped by reference and is published together with the path it describes.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

from ..listing import DirectorySnapshot


class SharedBrowserState:
    """Target path, latest snapshot, and scan acknowledgement behind one lock."""

    def __init__(self, initial_path: Path) -> None:
        self._changed = threading.Condition(threading.Lock())
        self._target_path = initial_path
        self._request_id = 0
        self._snapshot = DirectorySnapshot.empty(initial_path)
        self._acknowledged_path: Path | None = None
        self._acknowledged_request_id = -1
        self._closed = False

    def read_snapshot_and_path(self) -> tuple[DirectorySnapshot, Path]:
        with self._changed:
            return self._snapshot, self._target_path

    def read_target(self) -> tuple[Path, int]:
        """Return the requested path and the id of the request that set it."""
        with self._changed:
            return self._target_path, self._request_id

    def request_path_change(self, transform: Callable[[Path], Path]) -> tuple[Path, int]:
        """Apply ``transform`` to the target path and wake the poller.

        Returns the new target together with its request id; ids grow by one
        per request so a later acknowledgement can be matched against it.
        """
        with self._changed:
            self._target_path = transform(self._target_path)
            self._request_id += 1
            self._changed.notify_all()
            return self._target_path, self._request_id

    def set_target_path(self, path: Path) -> tuple[Path, int]:
        return self.request_path_change(lambda _current: path)

    def read_acknowledged_path(self) -> Path | None:
        with self._changed:
            return self._acknowledged_path

    def publish(self, snapshot: DirectorySnapshot, scanned_path: Path, request_id: int | None = None) -> None:
        """Store a finished scan and its acknowledgement in one critical section."""
        with self._changed:
            self._snapshot = snapshot
            self._acknowledged_path = scanned_path
            if request_id is not None:
                self._acknowledged_request_id = max(self._acknowledged_request_id, request_id)
            self._changed.notify_all()

    def is_acknowledged(self, path: Path, request_id: int = 0) -> bool:
        with self._changed:
            return self._is_acknowledged_locked(path, request_id)

    def _is_acknowledged_locked(self, path: Path, request_id: int) -> bool:
        return self._acknowledged_path == path and self._acknowledged_request_id >= request_id

    def wait_for_acknowledgement(self, path: Path, request_id: int = 0, timeout: float | None = None) -> bool:
        """Block until the poller has scanned ``path`` for ``request_id``.

        Returns ``False`` when ``timeout`` elapses first or the state is closed.
        """
        with self._changed:
            self._changed.wait_for(
                lambda: self._closed or self._is_acknowledged_locked(path, request_id),
                timeout=timeout,
            )
            return self._is_acknowledged_locked(path, request_id)

    def wait_for_path_request(self, seen_request_id: int, timeout: float) -> int | None:
        """Sleep up to ``timeout`` or until a request newer than ``seen_request_id``.

        Returns the current request id, or ``None`` once the state is closed.
        """
        with self._changed:
            self._changed.wait_for(
                lambda: self._closed or self._request_id != seen_request_id,
                timeout=timeout,
            )
            if self._closed:
                return None
            return self._request_id

    def close(self) -> None:
        """Signal shutdown to every waiter."""
        with self._changed:
            self._closed = True
            self._changed.notify_all()

    @property
    def closed(self) -> bool:
        with self._changed:
            return self._closed


__all__ = ["SharedBrowserState"]
