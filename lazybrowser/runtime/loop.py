"""Main interactive event loop for the browser.

One pass per iteration: finish any pending directory change, reconcile the
view with the latest snapshot, redraw when something changed, then wait up
to ``input_timeout_ms`` for a single key.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from ..input import read_key
from ..key_handlers import handle_browser_key
from ..render import RenderContext, listing_rows, render_browser_frame
from ..ui_theme import DEFAULT_THEME, UITheme
from .navigation import ViewController
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    input_timeout_ms: int = 100


def _render_context(controller: ViewController, columns: int, lines: int, theme: UITheme) -> RenderContext:
    pending = controller.pending
    return RenderContext(
        current_path=controller.active_path,
        entries=controller.entries,
        selected=controller.view.selected,
        scroll=controller.view.scroll,
        width=columns,
        height=lines,
        pending_path=pending.target if pending is not None else None,
        status_message=controller.status_message,
        theme=theme,
    )


def run_main_loop(
    controller: ViewController,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Run the render/input loop until the quit key is pressed."""
    last_size: tuple[int, int] | None = None
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                controller.dirty = True

            controller.expire_status_message()
            controller.poll_pending()
            controller.sync(listing_rows(term.lines))

            if controller.dirty:
                render_browser_frame(_render_context(controller, term.columns, term.lines, theme))
                controller.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.input_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue

            # Terminals may send CR, LF, or CR+LF for one Enter press.
            if key == "ENTER_LF" and skip_next_lf:
                skip_next_lf = False
                continue
            skip_next_lf = key == "ENTER_CR"
            if key in {"ENTER_CR", "ENTER_LF"}:
                key = "ENTER"

            if handle_browser_key(key, controller):
                break


__all__ = ["RuntimeLoopTiming", "run_main_loop"]
