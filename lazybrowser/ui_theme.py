"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser chrome, entry names (by kind) and
entry icons (by icon category).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import icons


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reverse: str
    reset: str
    header: str
    loading: str
    status: str
    status_message: str
    entry_dir: str
    entry_file: str
    entry_other: str
    icon_colors: dict[str, str] = field(default_factory=dict)

    def icon_color(self, category: str) -> str:
        return self.icon_colors.get(category, "")


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1m",
    loading="\033[33m",
    status="\033[7m",
    status_message="\033[1;33m",
    entry_dir="\033[34m",
    entry_file="\033[37m",
    entry_other="\033[33m",
    icon_colors={
        icons.ICON_RUST: "\033[33m",
        icons.ICON_GIT: "\033[33m",
        icons.ICON_CONFIG: "\033[36m",
        icons.ICON_LOCK: "\033[33m",
        icons.ICON_JSON: "\033[33m",
        icons.ICON_JS: "\033[32m",
        icons.ICON_IMAGE: "\033[31m",
        icons.ICON_CSS: "\033[34m",
        icons.ICON_HTML: "\033[33m",
        icons.ICON_FONT: "\033[31m",
    },
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    loading="\033[38;5;215m",
    status="\033[7;38;5;31m",
    status_message="\033[1;38;5;215m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_other="\033[38;5;153m",
    icon_colors={
        icons.ICON_RUST: "\033[38;5;173m",
        icons.ICON_GIT: "\033[38;5;202m",
        icons.ICON_CONFIG: "\033[38;5;73m",
        icons.ICON_LOCK: "\033[38;5;229m",
        icons.ICON_JSON: "\033[38;5;221m",
        icons.ICON_JS: "\033[38;5;84m",
        icons.ICON_IMAGE: "\033[38;5;175m",
        icons.ICON_CSS: "\033[38;5;39m",
        icons.ICON_HTML: "\033[38;5;208m",
        icons.ICON_FONT: "\033[38;5;167m",
        icons.ICON_DIRECTORY: "\033[38;5;45m",
    },
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    reset="\033[0m",
    header="",
    loading="",
    status="",
    status_message="",
    entry_dir="",
    entry_file="",
    entry_other="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
