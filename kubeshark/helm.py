"""Helm chart references and the local chart override."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

from kubeshark.misc import PROGRAM

ENV_HELM_DRIVER = "HELM_DRIVER"
ENV_HELM_CHART_PATH = f"{PROGRAM.upper()}_HELM_CHART_PATH"

_OCI_REF_TAG = re.compile(r"(oci://[^:]+(:[0-9]{1,5})?[^:]+):(.*)")


class ChartReferenceError(ValueError):
    """An OCI chart reference is not of the form ``oci://host/path:tag``."""

    def __init__(self, chart_ref: str) -> None:
        self.chart_ref = chart_ref
        super().__init__(f"improperly formatted oci chart reference: {chart_ref}")


def parse_oci_ref(chart_ref: str) -> tuple[str, str]:
    """Split an OCI chart reference into ``(reference, tag)``.

    Raises ChartReferenceError if the reference has no tag or is not OCI.
    """
    match = _OCI_REF_TAG.fullmatch(chart_ref)
    if match is None:
        raise ChartReferenceError(chart_ref)
    return match.group(1), match.group(3)


def chart_path_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Return the local chart path set in the environment, or "" if none."""
    env = os.environ if environ is None else environ
    return env.get(ENV_HELM_CHART_PATH, "")