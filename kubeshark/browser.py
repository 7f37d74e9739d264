"""Open a URL in the desktop's web browser."""

from __future__ import annotations

import logging
import subprocess
import sys

log = logging.getLogger(__name__)


def _browser_command(url: str) -> list[str] | None:
    platform = sys.platform
    if platform.startswith("linux"):
        return ["xdg-open", url]
    if platform == "win32":
        return ["rundll32", "url.dll,FileProtocolHandler", url]
    if platform == "darwin":
        return ["open", url]
    return None


def open_browser(url: str) -> bool:
    """Start the platform's browser opener on ``url`` without waiting.

    Failures are logged; returns True if the opener was started.
    """
    command = _browser_command(url)
    if command is None:
        log.error("While trying to open a browser: unsupported platform")
        return False
    try:
        subprocess.Popen(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as err:
        log.error("While trying to open a browser: %s", err)
        return False
    return True