"""ANSI-aware text measurement and clipping.

Escape sequences are carried through untouched and take no columns, so
styled rows can be fitted to the terminal width.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the column width of ``text`` with ANSI escapes removed."""
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


_ANSI_TOKEN_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences before the cut are kept so styling stays balanced by the
    caller's trailing reset.
    """
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    used = 0
    for token in _ANSI_TOKEN_RE.split(text):
        if not token:
            continue
        if ANSI_ESCAPE_RE.fullmatch(token):
            kept.append(token)
            continue
        for ch in token:
            width = char_display_width(ch)
            if used + width > max_cols:
                return "".join(kept)
            kept.append(ch)
            used += width
    return "".join(kept)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "display_width",
    "clip_ansi_line",
    "pad_ansi_line",
]
