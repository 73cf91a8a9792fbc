"""Full-screen frame rendering for the directory browser.

Builds one composed ANSI frame per redraw: a path header, the visible slice
of the listing, and a status line. Rendering never mutates browser state.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from .ansi import clip_ansi_line, display_width, pad_ansi_line
from .icons import classify_entry
from .listing import EntryKind, FileEntry
from .ui_theme import DEFAULT_THEME, UITheme

LOADING_MARKER = "loading…"
KEY_HINTS = "↑↓ move  ⏎ open  ⌫ up  q quit"


@dataclass
class RenderContext:
    current_path: Path
    entries: tuple[FileEntry, ...]
    selected: int
    scroll: int
    width: int
    height: int
    pending_path: Path | None = None
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME


def listing_rows(height: int) -> int:
    """Number of entry rows between the header and the status line."""
    return max(1, height - 2)


def _entry_name_color(entry: FileEntry, theme: UITheme) -> str:
    if entry.kind is EntryKind.DIRECTORY:
        return theme.entry_dir
    if entry.kind is EntryKind.FILE:
        return theme.entry_file
    return theme.entry_other


def format_entry_row(entry: FileEntry, selected: bool, theme: UITheme = DEFAULT_THEME) -> str:
    """Return `` <icon> <name>`` styled by icon category and entry kind."""
    category, glyph = classify_entry(entry)
    icon_color = theme.icon_color(category)
    icon = f"{icon_color}{glyph}{theme.reset}" if icon_color else glyph
    style = (theme.reverse if selected else "") + _entry_name_color(entry, theme)
    name = f"{style}{entry.name}{theme.reset}" if style else entry.name
    return f" {icon} {name}"


def format_header(context: RenderContext) -> str:
    theme = context.theme
    header = f"{theme.header}{context.current_path}{theme.reset}"
    if context.pending_path is not None:
        header += f"  {theme.loading}→ {context.pending_path} ({LOADING_MARKER}){theme.reset}"
    return header


def format_status(context: RenderContext) -> str:
    theme = context.theme
    width = max(1, context.width - 1)
    if context.status_message:
        return pad_ansi_line(f"{theme.status_message}{context.status_message}{theme.reset}", width)
    total = len(context.entries)
    position = f"{context.selected + 1}/{total}" if total else "empty"
    left = f" {position}"
    gap = max(1, width - display_width(left) - display_width(KEY_HINTS) - 1)
    line = f"{left}{' ' * gap}{KEY_HINTS} "
    return f"{theme.status}{pad_ansi_line(line, width)}{theme.reset}"


def build_frame(context: RenderContext) -> str:
    """Compose the complete frame for ``context`` as one string."""
    width = max(1, context.width)
    rows = listing_rows(context.height)
    out: list[str] = ["\033[H\033[J"]
    out.append(clip_ansi_line(format_header(context), width))
    out.append("\033[0m\r\n")
    for row in range(rows):
        idx = context.scroll + row
        if 0 <= idx < len(context.entries):
            line = format_entry_row(context.entries[idx], idx == context.selected, context.theme)
            out.append(clip_ansi_line(line, width))
            out.append("\033[0m")
        out.append("\r\n")
    out.append(format_status(context))
    out.append("\033[0m")
    return "".join(out)


def render_browser_frame(context: RenderContext) -> None:
    os.write(sys.stdout.fileno(), build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "LOADING_MARKER",
    "RenderContext",
    "listing_rows",
    "format_entry_row",
    "format_header",
    "format_status",
    "build_frame",
    "render_browser_frame",
]
