"""Command-line front door for lazybrowser.

Parses CLI options, resolves the starting directory, and builds the per-run
settings before dispatching into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .runtime import run_browser
from .runtime.config import DEFAULT_LOG_PATH, BrowserSettings
from .ui_theme import available_theme_names


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory in the terminal; files open in their default application."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--poll-interval",
        type=_positive_int,
        default=100,
        metavar="MS",
        help="Milliseconds between directory rescans (default: 100).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Write diagnostics to this file (default: {DEFAULT_LOG_PATH}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    return parser


def settings_from_args(args: argparse.Namespace) -> BrowserSettings:
    return BrowserSettings(
        poll_interval=args.poll_interval / 1000.0,
        theme_name=args.theme,
        no_color=args.no_color,
        log_path=Path(args.log_file).expanduser() if args.log_file else DEFAULT_LOG_PATH,
        log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    if not sys.stdin.isatty():
        raise SystemExit("lazybrowser needs an interactive terminal.")

    run_browser(path, settings_from_args(args))


if __name__ == "__main__":
    main()
