"""Compare the running version with the latest published release."""

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

import requests

from kubeshark.misc import PROGRAM, VER, WEBSITE
from kubeshark.text import Color, colorize

log = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
LATEST_RELEASE_URL = f"{GITHUB_API}/repos/{PROGRAM}/{PROGRAM}/releases/latest"
ENV_DISABLE_VERSION_CHECK = f"{PROGRAM.upper()}_DISABLE_VERSION_CHECK"
FETCH_TIMEOUT = 10.0


@dataclass(frozen=True)
class Release:
    """A published release: its tag and the page that shows it."""

    tag_name: str
    html_url: str


def fetch_latest_release(session: requests.Session | None = None) -> Release:
    """Fetch the latest release.

    Raises requests.RequestException on network or HTTP errors and
    ValueError if the answer is not the expected JSON.
    """
    sender = session if session is not None else requests
    response = sender.get(
        LATEST_RELEASE_URL,
        headers={"Accept": "application/vnd.github+json"},
        timeout=FETCH_TIMEOUT,
    )
    response.raise_for_status()
    payload = response.json()
    try:
        return Release(tag_name=str(payload["tag_name"]), html_url=str(payload["html_url"]))
    except (KeyError, TypeError) as err:
        raise ValueError(f"unexpected release data: {err}") from err


def _is_windows(platform: str) -> bool:
    return platform.lower().startswith("win")


def upgrade_command(release: Release, platform: str | None = None) -> str:
    """Return the shell command that downloads ``release`` on ``platform``."""
    platform = sys.platform if platform is None else platform
    if _is_windows(platform):
        download_url = release.html_url.replace("tag", "download", 1)
        return f"curl -LO {download_url}/{PROGRAM}.exe"
    return f"sh <(curl -Ls {WEBSITE}/install)"


def check_newer_version(
    current_version: str = VER,
    fetch: Callable[[], Release] = fetch_latest_release,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> str | None:
    """Warn if a release other than ``current_version`` is published.

    Returns the upgrade command when one is, otherwise None. The check is
    skipped when the disable variable is set, and a failed fetch is logged.
    """
    env = os.environ if environ is None else environ
    if env.get(ENV_DISABLE_VERSION_CHECK, ""):
        return None

    log.info("Checking for a newer version...")
    start = time.monotonic()
    try:
        latest = fetch()
    except (requests.RequestException, ValueError) as err:
        log.error("Failed to get the latest release: %s", err)
        return None

    log.debug(
        "Fetched the latest release: upstream-version=%s local-version=%s elapsed-time=%.3fs",
        latest.tag_name, current_version, time.monotonic() - start,
    )

    if current_version == latest.tag_name:
        return None

    command = upgrade_command(latest, platform)
    message = (
        f"There is a new release! {current_version} -> {latest.tag_name} "
        "Please upgrade to the latest release, as new releases are not always "
        "backward compatible. Run:"
    )
    log.warning("%s command=%s", colorize(message, Color.YELLOW), command)
    return command