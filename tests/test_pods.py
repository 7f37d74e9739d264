import re

import pytest

from kubeshark.pods import (
    FRONT_POD_NAME,
    HUB_POD_NAME,
    MIN_KUBERNETES_SERVER_VERSION,
    SELF_RESOURCES_PREFIX,
    Pod,
    UnsupportedKubernetesVersion,
    filter_pods_matching,
    is_pod_running,
    resolve_namespaces,
    running_pods_matching,
    validate_kubernetes_version,
)

PODS = [
    Pod("kubeshark-hub", "ks", "Running", ("hub",)),
    Pod("kubeshark-front", "ks", "Pending", ("front",)),
    Pod("kubeshark-worker-abc", "ks", "Running", ("sniffer", "tracer")),
    Pod("nginx", "default", "Running", ("nginx",)),
]


def test_resource_names_share_prefix():
    assert FRONT_POD_NAME == "kubeshark-front"
    assert HUB_POD_NAME.startswith(SELF_RESOURCES_PREFIX)


def test_is_pod_running():
    assert is_pod_running(Pod("a", phase="Running"))
    assert not is_pod_running(Pod("a", phase="Succeeded"))


def test_filter_pods_matching_anchored_prefix():
    matched = filter_pods_matching(PODS, "^" + SELF_RESOURCES_PREFIX)
    assert [pod.name for pod in matched] == [
        "kubeshark-hub",
        "kubeshark-front",
        "kubeshark-worker-abc",
    ]


def test_filter_pods_matching_is_unanchored_search():
    matched = filter_pods_matching(PODS, re.compile("worker"))
    assert [pod.name for pod in matched] == ["kubeshark-worker-abc"]


def test_running_pods_matching_drops_pending():
    matched = running_pods_matching(PODS, "kubeshark")
    assert [pod.name for pod in matched] == ["kubeshark-hub", "kubeshark-worker-abc"]
    assert all(is_pod_running(pod) for pod in matched)


def test_resolve_namespaces_uses_configured_without_listing():
    def fail():
        raise AssertionError("cluster should not be listed")

    result = resolve_namespaces(["a", "b", "a", "c"], ["c"], fail)
    assert result == ["a", "b"]


def test_resolve_namespaces_lists_cluster_when_unset():
    result = resolve_namespaces([], ["kube-system"], lambda: ["default", "kube-system", "ks"])
    assert result == ["default", "ks"]


def test_resolve_namespaces_all_excluded():
    assert resolve_namespaces(["a"], ["a"], lambda: []) == []


@pytest.mark.parametrize("version", ["v1.27.3", MIN_KUBERNETES_SERVER_VERSION, "v1.16.8-gke.1"])
def test_validate_kubernetes_version_accepts(version):
    assert validate_kubernetes_version(version) is None


def test_validate_kubernetes_version_rejects_old():
    with pytest.raises(UnsupportedKubernetesVersion) as info:
        validate_kubernetes_version("v1.15.0")
    assert info.value.server_version == "v1.15.0"
    assert MIN_KUBERNETES_SERVER_VERSION in str(info.value)


def test_validate_kubernetes_version_invalid_string():
    with pytest.raises(ValueError):
        validate_kubernetes_version("unknown")