"""Pod selection, namespace resolution and cluster version checks."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from kubeshark.semver import SemVersion
from kubeshark.slices import diff, unique

SELF_RESOURCES_PREFIX = "kubeshark-"
FRONT_POD_NAME = SELF_RESOURCES_PREFIX + "front"
FRONT_SERVICE_NAME = FRONT_POD_NAME
HUB_POD_NAME = SELF_RESOURCES_PREFIX + "hub"
HUB_SERVICE_NAME = HUB_POD_NAME
K8S_ALL_NAMESPACES = ""
MIN_KUBERNETES_SERVER_VERSION = "1.16.0"
APP_LABEL_KEY = "app.kubeshark.co/app"

POD_RUNNING = "Running"


@dataclass(frozen=True)
class Pod:
    """The parts of a cluster pod that the tool works with."""

    name: str
    namespace: str = ""
    phase: str = ""
    containers: tuple[str, ...] = ()
    labels: dict[str, str] = field(default_factory=dict, compare=False, hash=False)


class UnsupportedKubernetesVersion(RuntimeError):
    """The cluster runs a server version older than the supported minimum."""

    def __init__(self, server_version: str) -> None:
        self.server_version = server_version
        super().__init__(
            f"kubernetes server version {server_version} is not supported, "
            f"supporting only kubernetes server version of "
            f"{MIN_KUBERNETES_SERVER_VERSION} or higher"
        )


def is_pod_running(pod: Pod) -> bool:
    """Return True if the pod is in the Running phase."""
    return pod.phase == POD_RUNNING


def filter_pods_matching(pods: Iterable[Pod], regex: str | re.Pattern[str]) -> list[Pod]:
    """Return the pods whose name matches ``regex`` anywhere."""
    pattern = re.compile(regex)
    return [pod for pod in pods if pattern.search(pod.name)]


def running_pods_matching(pods: Iterable[Pod], regex: str | re.Pattern[str]) -> list[Pod]:
    """Return the running pods whose name matches ``regex`` anywhere."""
    return [pod for pod in filter_pods_matching(pods, regex) if is_pod_running(pod)]


def resolve_namespaces(
    configured: Iterable[str],
    excluded: Iterable[str],
    list_all: Callable[[], Iterable[str]],
) -> list[str]:
    """Return the namespaces to tap.

    The configured namespaces, without repeats, are used if there are any;
    otherwise ``list_all`` is called for every namespace of the cluster.
    The excluded namespaces are then removed.
    """
    configured = list(configured)
    namespaces = unique(configured) if configured else list(list_all())
    return diff(namespaces, excluded)


def validate_kubernetes_version(server_version: str) -> None:
    """Raise UnsupportedKubernetesVersion if ``server_version`` is below the minimum."""
    if SemVersion(MIN_KUBERNETES_SERVER_VERSION).greater_than(server_version):
        raise UnsupportedKubernetesVersion(str(server_version))