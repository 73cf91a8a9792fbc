"""Hand a file to the host's default application.

Fire-and-forget: the child is detached and its output discarded. Returns an
error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def default_open_command(target: Path, platform: str | None = None) -> list[str] | None:
    """Return the opener argv for ``platform``, or ``None`` where ``os.startfile`` is used."""
    platform = sys.platform if platform is None else platform
    if platform == "win32":
        return None
    if platform == "darwin":
        return ["open", str(target)]
    return ["xdg-open", str(target)]


def open_with_default_application(target: Path) -> str | None:
    command = default_open_command(target)
    try:
        if command is None:
            os.startfile(str(target))  # type: ignore[attr-defined]
        else:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
    except OSError as exc:
        LOGGER.warning("Failed to open %s: %s", target, exc)
        return f"Failed to open {target.name}: {exc}"
    LOGGER.debug("Opened %s", target)
    return None


__all__ = ["default_open_command", "open_with_default_application"]
