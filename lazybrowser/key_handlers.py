"""Key-event handler for the browser view.

Converts normalized key tokens into ``ViewController`` calls.
"""

from __future__ import annotations

from .runtime.navigation import ViewController

QUIT_KEYS = frozenset({"q"})
ASCEND_KEYS = frozenset({"BACKSPACE", "LEFT", "h"})
ACTIVATE_KEYS = frozenset({"ENTER", "RIGHT", "l"})
UP_KEYS = frozenset({"UP", "k"})
DOWN_KEYS = frozenset({"DOWN", "j"})
FIRST_KEYS = frozenset({"HOME", "g"})
LAST_KEYS = frozenset({"END", "G"})
HEADER_ROWS = 1


def _parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def _handle_left_click(key: str, controller: ViewController) -> None:
    _col, row = _parse_mouse_col_row(key)
    if row is None:
        return
    # Terminal rows are 1-based and the path header occupies the first one.
    list_row = row - 1 - HEADER_ROWS
    if 0 <= list_row < controller.visible_rows:
        index = controller.view.scroll + list_row
        if index < len(controller.entries):
            controller.select_index(index)


def handle_browser_key(key: str, controller: ViewController) -> bool:
    """Apply ``key`` to ``controller``; return ``True`` when the app should quit."""
    if key in QUIT_KEYS:
        return True
    if key in ASCEND_KEYS:
        controller.ascend()
    elif key in ACTIVATE_KEYS:
        controller.activate()
    elif key in UP_KEYS:
        controller.move_selection(-1)
    elif key in DOWN_KEYS:
        controller.move_selection(1)
    elif key == "PAGE_UP":
        controller.move_selection(-max(1, controller.visible_rows - 1))
    elif key == "PAGE_DOWN":
        controller.move_selection(max(1, controller.visible_rows - 1))
    elif key in FIRST_KEYS:
        controller.select_index(0)
    elif key in LAST_KEYS:
        controller.select_index(len(controller.entries) - 1)
    elif key.startswith("MOUSE_WHEEL_UP:"):
        controller.scroll(-1)
    elif key.startswith("MOUSE_WHEEL_DOWN:"):
        controller.scroll(1)
    elif key.startswith("MOUSE_LEFT_DOWN:"):
        _handle_left_click(key, controller)
    return False


__all__ = ["handle_browser_key"]
