"""Icon classification for directory entries.

Rules are checked in order and the first match wins, so specific names
(``.git``, ``package.json``) must precede the generic directory/file rules.
Glyphs come from the Nerd Fonts private-use area.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .listing import FileEntry

ICON_RUST = "rust"
ICON_GIT = "git"
ICON_CONFIG = "config"
ICON_LOCK = "lock"
ICON_JS = "js"
ICON_JSON = "json"
ICON_IMAGE = "image"
ICON_CSS = "css"
ICON_HTML = "html"
ICON_FONT = "font"
ICON_DIRECTORY = "directory"
ICON_TEXT = "text"
ICON_FILE = "file"
ICON_UNKNOWN = "unknown"

UNKNOWN_GLYPH = "?"

_GIT_METADATA_FILES = frozenset({"HEAD", "FETCH_HEAD", "description", "config"})


@dataclass(frozen=True)
class IconRule:
    category: str
    glyph: str
    matches: Callable[[FileEntry], bool]


def _suffix_rule(*suffixes: str) -> Callable[[FileEntry], bool]:
    return lambda entry: entry.name.endswith(suffixes)


def _is_git_entry(entry: FileEntry) -> bool:
    if entry.name == ".git" and entry.is_dir:
        return True
    if entry.name == ".gitignore" and entry.is_file:
        return True
    return entry.is_file and entry.name in _GIT_METADATA_FILES and entry.path.parent.name == ".git"


def _is_js_entry(entry: FileEntry) -> bool:
    return entry.name.endswith(".js") or entry.name in {"package.json", "node_modules"}


ICON_RULES: tuple[IconRule, ...] = (
    IconRule(ICON_RUST, "\ue7a8", _suffix_rule(".rs")),
    IconRule(ICON_GIT, "\ue702", _is_git_entry),
    IconRule(ICON_CONFIG, "\uf013", _suffix_rule(".toml")),
    IconRule(ICON_LOCK, "\uf023", _suffix_rule(".lock")),
    IconRule(ICON_JS, "\ue718", _is_js_entry),
    IconRule(ICON_JSON, "\ue60b", _suffix_rule(".json", ".jsonc", ".jsonl")),
    IconRule(ICON_IMAGE, "\ue701", _suffix_rule(".svg", ".png", ".jpg", ".jpeg")),
    IconRule(ICON_CSS, "\uf13c", _suffix_rule(".css")),
    IconRule(ICON_HTML, "\uf13b", _suffix_rule(".html")),
    IconRule(ICON_FONT, "\uf031", _suffix_rule(".woff2", ".ttf")),
    IconRule(ICON_DIRECTORY, "\uf07b", lambda entry: entry.is_dir),
    IconRule(ICON_TEXT, "\uf15c", _suffix_rule(".txt")),
    IconRule(ICON_FILE, "\uf15b", lambda entry: entry.is_file),
)


def classify_entry(entry: FileEntry) -> tuple[str, str]:
    """Return ``(category, glyph)`` for ``entry``."""
    for rule in ICON_RULES:
        if rule.matches(entry):
            return rule.category, rule.glyph
    return ICON_UNKNOWN, UNKNOWN_GLYPH


__all__ = [
    "ICON_RUST",
    "ICON_GIT",
    "ICON_CONFIG",
    "ICON_LOCK",
    "ICON_JS",
    "ICON_JSON",
    "ICON_IMAGE",
    "ICON_CSS",
    "ICON_HTML",
    "ICON_FONT",
    "ICON_DIRECTORY",
    "ICON_TEXT",
    "ICON_FILE",
    "ICON_UNKNOWN",
    "UNKNOWN_GLYPH",
    "IconRule",
    "ICON_RULES",
    "classify_entry",
]
