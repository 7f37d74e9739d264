"""Program identity and build information."""

from __future__ import annotations

import os
from pathlib import Path

SOFTWARE = "Kubeshark"
PROGRAM = "kubeshark"
DESCRIPTION = "The API Traffic Analyzer for Kubernetes"
WEBSITE = "https://kubeshark.co"
VER = "0.0.0"
BRANCH = "master"
GIT_COMMIT_HASH = ""
BUILD_TIMESTAMP = ""
RBAC_VERSION = "v1"
PLATFORM = ""


def get_dot_folder_path() -> str:
    """Return the program's folder in the user's home, or "" if there is no home."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return ""
    return os.path.join(str(home), f".{PROGRAM}")