"""Tests for cursor handling and the directory navigation protocol."""

from __future__ import annotations

import threading
import time
import unittest
from pathlib import Path

from lazybrowser.listing import DirectorySnapshot, EntryKind, FileEntry
from lazybrowser.runtime.history import NavigationHistory, ViewState
from lazybrowser.runtime.navigation import ViewController, clamp_view
from lazybrowser.runtime.poller import DirectoryPoller
from lazybrowser.runtime.state import SharedBrowserState

ROOT = Path("/root")


class _FakeFs:
    """In-memory directory tree: path -> list of (name, kind)."""

    def __init__(self, tree: dict[Path, list[tuple[str, EntryKind]]]) -> None:
        self.tree = tree
        self.lock = threading.Lock()

    def set_children(self, path: Path, children: list[tuple[str, EntryKind]]) -> None:
        with self.lock:
            self.tree[path] = children

    def snapshot(self, path: Path) -> DirectorySnapshot:
        with self.lock:
            children = list(self.tree.get(path, []))
        entries = [FileEntry(name=name, path=path / name, kind=kind) for name, kind in children]
        entries.sort(key=lambda entry: not entry.is_dir)
        return DirectorySnapshot(source_path=path, entries=tuple(entries))


def _dirs(*names: str) -> list[tuple[str, EntryKind]]:
    return [(name, EntryKind.DIRECTORY) for name in names]


def _files(*names: str) -> list[tuple[str, EntryKind]]:
    return [(name, EntryKind.FILE) for name in names]


class _Harness:
    def __init__(self, fs: _FakeFs, start: Path, **controller_kwargs) -> None:
        self.fs = fs
        self.state = SharedBrowserState(start)
        self.history = NavigationHistory()
        self.opened: list[Path] = []
        self.open_result: str | None = None
        self.poller = DirectoryPoller(self.state, interval=0.01, build_snapshot=fs.snapshot)
        controller_kwargs.setdefault("convergence_timeout", 2.0)
        self.controller = ViewController(
            self.state,
            self.history,
            open_file=self._open_file,
            **controller_kwargs,
        )

    def _open_file(self, path: Path) -> str | None:
        self.opened.append(path)
        return self.open_result

    def __enter__(self) -> "_Harness":
        self.poller.start()
        return self

    def __exit__(self, *_exc) -> None:
        self.poller.stop(timeout=2.0)


def _standard_fs() -> _FakeFs:
    return _FakeFs(
        {
            ROOT: _dirs("dirA", "dirB") + _files("file1.txt"),
            ROOT / "dirA": _dirs("x", "y") + _files("a1", "a2", "a3"),
            ROOT / "dirB": _files("b1"),
            ROOT / "dirA" / "x": [],
        }
    )


def _names(controller: ViewController) -> list[str]:
    return [entry.name for entry in controller.entries]


class ClampViewTests(unittest.TestCase):
    def test_selection_past_end_clamps_to_last_entry(self) -> None:
        self.assertEqual(clamp_view(ViewState(9, 0), entry_count=3, visible_rows=10).selected, 2)

    def test_empty_listing_clamps_to_zero(self) -> None:
        self.assertEqual(clamp_view(ViewState(5, 4), entry_count=0, visible_rows=10), ViewState(0, 0))

    def test_negative_selection_clamps_to_zero(self) -> None:
        self.assertEqual(clamp_view(ViewState(-3, 0), entry_count=3, visible_rows=10), ViewState(0, 0))

    def test_scrolls_down_to_keep_margin_above_bottom(self) -> None:
        view = clamp_view(ViewState(10, 0), entry_count=50, visible_rows=5, margin=1)

        self.assertEqual(view, ViewState(selected=10, scroll=7))

    def test_scrolls_up_when_selection_above_viewport(self) -> None:
        view = clamp_view(ViewState(2, 8), entry_count=50, visible_rows=5, margin=1)

        self.assertEqual(view, ViewState(selected=2, scroll=2))

    def test_scroll_never_exceeds_listing(self) -> None:
        view = clamp_view(ViewState(0, 40), entry_count=3, visible_rows=10)

        self.assertEqual(view, ViewState(0, 0))

    def test_clamped_view_is_a_fixed_point(self) -> None:
        for selected in range(0, 30):
            for scroll in range(0, 30, 3):
                once = clamp_view(ViewState(selected, scroll), entry_count=20, visible_rows=6, margin=1)
                self.assertEqual(clamp_view(once, entry_count=20, visible_rows=6, margin=1), once)

    def test_single_visible_row_ignores_margin(self) -> None:
        view = clamp_view(ViewState(4, 0), entry_count=10, visible_rows=1, margin=3)

        self.assertEqual(view, ViewState(4, 4))


class ViewControllerNavigationTests(unittest.TestCase):
    def test_start_converges_on_initial_directory(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            self.assertTrue(harness.controller.start())

        controller = harness.controller
        self.assertEqual(controller.active_path, ROOT)
        self.assertIsNone(controller.pending)
        self.assertEqual(_names(controller), ["dirA", "dirB", "file1.txt"])
        self.assertEqual(controller.view, ViewState(0, 0))

    def test_descend_without_history_starts_at_top(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)

            self.assertTrue(controller.descend())
            snapshot, _target = harness.state.read_snapshot_and_path()

        self.assertEqual(controller.active_path, ROOT / "dirA")
        self.assertEqual(snapshot.source_path, ROOT / "dirA")
        self.assertEqual(_names(controller), ["x", "y", "a1", "a2", "a3"])
        self.assertEqual(controller.view, ViewState(0, 0))

    def test_descend_ignores_child_named_like_parent(self) -> None:
        proj = Path("/proj")
        fs = _FakeFs(
            {
                proj: _dirs("lib"),
                proj / "lib": _dirs("aaa", "proj", "bbb"),
            }
        )
        with _Harness(fs, proj) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)

            self.assertTrue(controller.descend())
            controller.sync(20)

        self.assertEqual(controller.active_path, proj / "lib")
        self.assertEqual(_names(controller), ["aaa", "proj", "bbb"])
        self.assertEqual(controller.view, ViewState(0, 0))

    def test_ascend_without_history_selects_directory_just_left(self) -> None:
        with _Harness(_standard_fs(), ROOT / "dirB") as harness:
            controller = harness.controller
            controller.start()

            self.assertTrue(controller.ascend())

        self.assertEqual(controller.active_path, ROOT)
        self.assertEqual(controller.view, ViewState(selected=1, scroll=1))
        self.assertEqual(controller.selected_entry().name, "dirB")

    def test_ascend_falls_back_to_top_when_exited_directory_vanished(self) -> None:
        fs = _standard_fs()
        with _Harness(fs, ROOT / "dirB") as harness:
            controller = harness.controller
            controller.start()
            fs.set_children(ROOT, _dirs("dirA") + _files("file1.txt"))

            controller.ascend()

        self.assertEqual(controller.view, ViewState(0, 0))

    def test_ascend_restores_saved_view_instead_of_recomputing(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.select_index(1)
            self.assertEqual(controller.view, ViewState(selected=1, scroll=0))
            controller.descend()
            controller.sync(20)
            self.assertEqual(controller.active_path, ROOT / "dirB")
            self.assertEqual(harness.history.lookup(ROOT), ViewState(selected=1, scroll=0))

            controller.ascend()

        self.assertEqual(controller.active_path, ROOT)
        self.assertEqual(controller.view, ViewState(selected=1, scroll=0))

    def test_ascend_then_descend_restores_exact_view(self) -> None:
        with _Harness(_standard_fs(), ROOT / "dirA") as harness:
            controller = harness.controller
            controller.start()
            controller.sync(3)
            controller.move_selection(3)
            controller.sync(3)
            before = controller.view
            self.assertEqual(before.selected, 3)

            controller.ascend()
            controller.sync(3)
            self.assertEqual(controller.selected_entry().name, "dirA")
            controller.descend()
            controller.sync(3)

        self.assertEqual(controller.active_path, ROOT / "dirA")
        self.assertEqual(controller.view, before)

    def test_ascend_at_filesystem_root_is_noop(self) -> None:
        fs = _FakeFs({Path("/"): _dirs("root")})
        with _Harness(fs, Path("/")) as harness:
            controller = harness.controller
            controller.start()

            self.assertFalse(controller.ascend())

        self.assertEqual(controller.active_path, Path("/"))

    def test_descend_on_file_does_nothing(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.select_index(2)

            self.assertFalse(controller.descend())

        self.assertEqual(controller.active_path, ROOT)

    def test_activate_file_delegates_to_launcher_without_navigation(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.select_index(2)
            _target_before, request_before = harness.state.read_target()

            self.assertTrue(controller.activate())
            _target_after, request_after = harness.state.read_target()

        self.assertEqual(harness.opened, [ROOT / "file1.txt"])
        self.assertEqual(request_before, request_after)
        self.assertEqual(controller.status_message, "")

    def test_launcher_error_becomes_status_message(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            harness.open_result = "Failed to open file1.txt: missing"
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.select_index(2)

            controller.open_selected()

        self.assertEqual(controller.status_message, "Failed to open file1.txt: missing")

    def test_activate_directory_descends(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)

            controller.activate()

        self.assertEqual(controller.active_path, ROOT / "dirA")
        self.assertEqual(harness.opened, [])

    def test_sync_saves_view_for_active_path(self) -> None:
        with _Harness(_standard_fs(), ROOT) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.move_selection(1)
            controller.sync(20)

        self.assertEqual(harness.history.lookup(ROOT), ViewState(1, 0))

    def test_shrinking_directory_clamps_selection_on_next_sync(self) -> None:
        fs = _standard_fs()
        with _Harness(fs, ROOT / "dirA") as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.select_index(4)
            fs.set_children(ROOT / "dirA", _dirs("x") + _files("a1"))

            deadline = time.monotonic() + 2.0
            while time.monotonic() < deadline:
                controller.sync(20)
                if len(controller.entries) == 2:
                    break
                time.sleep(0.01)

        self.assertEqual(_names(controller), ["x", "a1"])
        self.assertEqual(controller.view.selected, 1)

    def test_directory_emptied_clamps_selection_to_zero(self) -> None:
        fs = _standard_fs()
        with _Harness(fs, ROOT / "dirA") as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.select_index(3)
            fs.set_children(ROOT / "dirA", [])

            deadline = time.monotonic() + 2.0
            while time.monotonic() < deadline and controller.entries:
                controller.sync(20)
                time.sleep(0.01)
            controller.sync(20)

        self.assertEqual(controller.entries, ())
        self.assertEqual(controller.view, ViewState(0, 0))
        self.assertIsNone(controller.selected_entry())


class ViewControllerPendingTests(unittest.TestCase):
    def _blocking_fs(self, blocked: Path, release: threading.Event) -> _FakeFs:
        fs = _standard_fs()
        original = fs.snapshot

        def snapshot(path: Path) -> DirectorySnapshot:
            if path == blocked:
                release.wait(timeout=5.0)
            return original(path)

        fs.snapshot = snapshot  # type: ignore[method-assign]
        return fs

    def test_timed_out_navigation_stays_pending_until_poller_catches_up(self) -> None:
        release = threading.Event()
        fs = self._blocking_fs(ROOT / "dirA", release)
        with _Harness(fs, ROOT, convergence_timeout=0.05) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)

            self.assertTrue(controller.descend())
            self.assertIsNotNone(controller.pending)
            self.assertEqual(controller.active_path, ROOT)
            self.assertEqual(_names(controller), ["dirA", "dirB", "file1.txt"])
            self.assertFalse(controller.move_selection(1))
            self.assertFalse(controller.descend())
            self.assertFalse(controller.poll_pending())

            release.set()
            deadline = time.monotonic() + 2.0
            while time.monotonic() < deadline and not controller.poll_pending():
                time.sleep(0.01)

        self.assertIsNone(controller.pending)
        self.assertEqual(controller.active_path, ROOT / "dirA")
        self.assertEqual(_names(controller), ["x", "y", "a1", "a2", "a3"])

    def test_ascend_escapes_a_pending_directory(self) -> None:
        release = threading.Event()
        fs = self._blocking_fs(ROOT / "dirA" / "x", release)
        with _Harness(fs, ROOT / "dirA", convergence_timeout=0.05) as harness:
            controller = harness.controller
            controller.start()
            controller.sync(20)
            controller.descend()
            self.assertEqual(controller.pending.target, ROOT / "dirA" / "x")

            release.set()
            controller.convergence_timeout = 2.0
            self.assertTrue(controller.ascend())

        self.assertIsNone(controller.pending)
        self.assertEqual(controller.active_path, ROOT / "dirA")
        self.assertEqual(controller.selected_entry().name, "x")


class ViewControllerCursorTests(unittest.TestCase):
    def _controller_with(self, count: int, rows: int) -> tuple[_Harness, ViewController]:
        fs = _FakeFs({ROOT: _files(*(f"f{idx:02d}" for idx in range(count)))})
        harness = _Harness(fs, ROOT)
        harness.__enter__()
        self.addCleanup(harness.__exit__)
        controller = harness.controller
        controller.start()
        controller.sync(rows)
        return harness, controller

    def test_move_selection_clamps_at_both_ends(self) -> None:
        _harness, controller = self._controller_with(3, rows=10)

        self.assertFalse(controller.move_selection(-1))
        controller.move_selection(5)

        self.assertEqual(controller.view.selected, 2)

    def test_moving_down_scrolls_viewport(self) -> None:
        _harness, controller = self._controller_with(30, rows=5)

        for _ in range(6):
            controller.move_selection(1)

        self.assertEqual(controller.view, ViewState(selected=6, scroll=3))

    def test_wheel_scroll_moves_viewport_and_drags_selection(self) -> None:
        _harness, controller = self._controller_with(30, rows=5)

        controller.scroll(1)
        controller.scroll(1)

        self.assertEqual(controller.view, ViewState(selected=2, scroll=2))

        controller.scroll(-1)
        self.assertEqual(controller.view.scroll, 1)
        self.assertEqual(controller.view.selected, 2)

    def test_wheel_scroll_up_at_top_is_noop(self) -> None:
        _harness, controller = self._controller_with(30, rows=5)

        self.assertFalse(controller.scroll(-1))

    def test_status_message_expires(self) -> None:
        now = [100.0]
        fs = _FakeFs({ROOT: []})
        with _Harness(fs, ROOT, clock=lambda: now[0]) as harness:
            controller = harness.controller
            controller.start()
            controller.set_status_message("hello", seconds=1.0)
            controller.expire_status_message()
            self.assertEqual(controller.status_message, "hello")

            now[0] = 101.5
            controller.expire_status_message()

        self.assertEqual(controller.status_message, "")


if __name__ == "__main__":
    unittest.main()
