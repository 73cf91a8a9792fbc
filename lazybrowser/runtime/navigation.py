"""Navigation protocol for the single-threaded UI side.

``ViewController`` owns the cursor for the directory on screen. Directory
changes go through ``SharedBrowserState``: request the new path, wait (with a
bound) for the poller to acknowledge it, then restore the cursor from
``NavigationHistory`` or place it on the directory just left.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..listing import DirectorySnapshot, FileEntry
from .history import NavigationHistory, ViewState
from .state import SharedBrowserState

LOGGER = logging.getLogger(__name__)

DEFAULT_CONVERGENCE_TIMEOUT_SECONDS = 0.5
DEFAULT_SCROLL_MARGIN = 1
STATUS_MESSAGE_SECONDS = 3.0


@dataclass(frozen=True)
class PendingNavigation:
    """Directory change requested but not yet acknowledged by the poller."""

    target: Path
    request_id: int
    exited_name: str | None
    requested_at: float


def _max_scroll(entry_count: int, visible_rows: int, margin: int) -> int:
    return max(0, entry_count - visible_rows + margin)


def _effective_margin(visible_rows: int, margin: int) -> int:
    return max(0, min(margin, visible_rows - 1))


def clamp_view(view: ViewState, entry_count: int, visible_rows: int, margin: int = DEFAULT_SCROLL_MARGIN) -> ViewState:
    """Clamp the cursor to the listing and scroll so it stays visible.

    The cursor is kept at least ``margin`` rows above the bottom edge. The
    result is a fixed point: clamping it again returns the same view.
    """
    rows = max(1, visible_rows)
    margin = _effective_margin(rows, margin)
    selected = 0 if entry_count <= 0 else max(0, min(view.selected, entry_count - 1))
    scroll = max(0, min(view.scroll, _max_scroll(entry_count, rows, margin)))
    last_comfortable_row = rows - 1 - margin
    if selected < scroll:
        scroll = selected
    elif selected > scroll + last_comfortable_row:
        scroll = selected - last_comfortable_row
    return ViewState(selected=selected, scroll=scroll)


class ViewController:
    """Cursor, scroll and directory navigation for the UI loop."""

    def __init__(
        self,
        state: SharedBrowserState,
        history: NavigationHistory,
        *,
        open_file: Callable[[Path], str | None],
        convergence_timeout: float = DEFAULT_CONVERGENCE_TIMEOUT_SECONDS,
        scroll_margin: int = DEFAULT_SCROLL_MARGIN,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.history = history
        self._open_file = open_file
        self.convergence_timeout = convergence_timeout
        self.scroll_margin = scroll_margin
        self._clock = clock
        initial_path, _request_id = state.read_target()
        self.active_path = initial_path
        self.view = ViewState()
        self.entries: tuple[FileEntry, ...] = ()
        self.pending: PendingNavigation | None = None
        self.visible_rows = 1
        self.status_message = ""
        self.status_message_until = 0.0
        self.dirty = True
        self._snapshot: DirectorySnapshot | None = None

    # Directory changes

    def start(self) -> bool:
        """Converge on the initial directory; returns whether it finished loading."""
        target, request_id = self.state.read_target()
        return self._begin(PendingNavigation(target, request_id, None, self._clock()))

    def ascend(self) -> bool:
        base = self.pending.target if self.pending is not None else self.active_path
        if base.parent == base:
            return False
        if self.pending is None:
            self.history.save(self.active_path, self.view)
        target, request_id = self.state.request_path_change(lambda current: current.parent)
        self._begin(PendingNavigation(target, request_id, base.name, self._clock()))
        return True

    def descend(self) -> bool:
        if self.pending is not None:
            return False
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        self.history.save(self.active_path, self.view)
        target, request_id = self.state.request_path_change(lambda current: current / entry.name)
        self._begin(PendingNavigation(target, request_id, None, self._clock()))
        return True

    def activate(self) -> bool:
        """Descend into the selected directory or open the selected file."""
        entry = self.selected_entry()
        if self.pending is not None or entry is None:
            return False
        if entry.is_dir:
            return self.descend()
        return self.open_selected()

    def open_selected(self) -> bool:
        if self.pending is not None:
            return False
        entry = self.selected_entry()
        if entry is None or entry.is_dir:
            return False
        error = self._open_file(entry.path)
        if error:
            self.set_status_message(error)
        return True

    def _begin(self, pending: PendingNavigation) -> bool:
        self.pending = pending
        self.dirty = True
        if self.state.wait_for_acknowledgement(pending.target, pending.request_id, self.convergence_timeout):
            self._finish_pending()
            return True
        LOGGER.info("Still loading %s after %.2fs", pending.target, self.convergence_timeout)
        return False

    def poll_pending(self) -> bool:
        """Finish a timed-out navigation once the poller has caught up."""
        pending = self.pending
        if pending is None:
            return False
        if not self.state.is_acknowledged(pending.target, pending.request_id):
            return False
        LOGGER.debug("Loaded %s after %.2fs", pending.target, self._clock() - pending.requested_at)
        self._finish_pending()
        return True

    def _finish_pending(self) -> None:
        pending = self.pending
        assert pending is not None
        snapshot, _target = self.state.read_snapshot_and_path()
        self.active_path = pending.target
        self._snapshot = snapshot
        self.entries = snapshot.entries
        self.view = self._resolve_view(pending.target, pending.exited_name, snapshot)
        self.pending = None
        self.dirty = True

    def _resolve_view(self, path: Path, exited_name: str | None, snapshot: DirectorySnapshot) -> ViewState:
        saved = self.history.lookup(path)
        if saved is not None:
            return saved
        if exited_name:
            idx = snapshot.index_of(exited_name)
            if idx is not None:
                return ViewState(selected=idx, scroll=idx)
        return ViewState()

    # Cursor and viewport

    def selected_entry(self) -> FileEntry | None:
        if 0 <= self.view.selected < len(self.entries):
            return self.entries[self.view.selected]
        return None

    def _set_view(self, view: ViewState) -> bool:
        if view == self.view:
            return False
        self.view = view
        self.dirty = True
        return True

    def select_index(self, index: int) -> bool:
        if self.pending is not None or not self.entries:
            return False
        candidate = ViewState(selected=index, scroll=self.view.scroll)
        return self._set_view(clamp_view(candidate, len(self.entries), self.visible_rows, self.scroll_margin))

    def move_selection(self, delta: int) -> bool:
        return self.select_index(self.view.selected + delta)

    def scroll(self, delta: int) -> bool:
        """Move the viewport by ``delta`` rows, dragging the cursor to stay visible."""
        if self.pending is not None or not self.entries:
            return False
        entry_count = len(self.entries)
        rows = max(1, self.visible_rows)
        margin = _effective_margin(rows, self.scroll_margin)
        scroll = max(0, min(self.view.scroll + delta, _max_scroll(entry_count, rows, margin)))
        top = scroll
        bottom = min(entry_count - 1, scroll + rows - 1 - margin)
        selected = max(top, min(self.view.selected, bottom))
        return self._set_view(clamp_view(ViewState(selected, scroll), entry_count, rows, margin))

    def sync(self, visible_rows: int) -> None:
        """Render-pass bookkeeping: pick up rescans, clamp, remember the view."""
        self.visible_rows = max(1, visible_rows)
        if self.pending is None:
            self._refresh_entries()
        self._set_view(clamp_view(self.view, len(self.entries), self.visible_rows, self.scroll_margin))
        self.history.save(self.active_path, self.view)

    def _refresh_entries(self) -> None:
        snapshot, _target = self.state.read_snapshot_and_path()
        if snapshot is self._snapshot or snapshot.source_path != self.active_path:
            return
        self._snapshot = snapshot
        if snapshot.entries != self.entries:
            self.entries = snapshot.entries
            self.dirty = True

    # Status line

    def set_status_message(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        self.status_message = message
        self.status_message_until = self._clock() + seconds
        self.dirty = True

    def expire_status_message(self) -> None:
        if self.status_message and self._clock() >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0
            self.dirty = True


__all__ = [
    "DEFAULT_CONVERGENCE_TIMEOUT_SECONDS",
    "DEFAULT_SCROLL_MARGIN",
    "PendingNavigation",
    "ViewController",
    "clamp_view",
]
