"""Per-directory cursor memory used when revisiting a directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ViewState:
    """Cursor and viewport position for one directory listing."""

    selected: int = 0
    scroll: int = 0


class NavigationHistory:
    """Unbounded mapping of absolute directory path to its last ``ViewState``."""

    def __init__(self) -> None:
        self._views: dict[Path, ViewState] = {}

    def save(self, path: Path, view: ViewState) -> None:
        self._views[path] = view

    def lookup(self, path: Path) -> ViewState | None:
        """Exact-path lookup; returns ``None`` for never-visited directories."""
        return self._views.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._views

    def __len__(self) -> int:
        return len(self._views)


__all__ = ["ViewState", "NavigationHistory"]
