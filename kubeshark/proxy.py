"""Paths, URLs and headers used when proxying to the tool's own services."""

from __future__ import annotations

K8S_PROXY_API_PREFIX = "/"
SELF_SERVICE_PORT = 80
STATIC_PREFIX = "/static/"

_MAX_PORT = 0xFFFF

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Headers": (
        "Content-Type, Content-Length, Accept-Encoding, X-CSRF-Token, "
        "Authorization, accept, origin, Cache-Control, X-Requested-With, "
        "x-session-token"
    ),
    "Access-Control-Allow-Methods": "POST, OPTIONS, GET, PUT, DELETE",
}


def self_hub_proxied_path(namespace: str, service_name: str) -> str:
    """Return the API server path that proxies to the service on port 80."""
    return (
        f"/api/v1/namespaces/{namespace}/services/"
        f"{service_name}:{SELF_SERVICE_PORT}/proxy"
    )


def proxy_on_port(host: str, port: int) -> str:
    """Return the base URL of a local proxy listening on ``host:port``."""
    return f"http://{host}:{port}"


def hub_url(host: str, port: int) -> str:
    """Return the URL of the hub API behind the local proxy."""
    return f"{proxy_on_port(host, port)}/api"


def reroute_api_path(path: str, namespace: str, service_name: str) -> str:
    """Prefix ``path`` with the service proxy path unless it already holds it."""
    proxied = self_hub_proxied_path(namespace, service_name)
    if proxied in path:
        return path
    return f"{proxied}{path}"


def reroute_static_path(path: str, namespace: str, service_name: str) -> str:
    """Send the first ``/static/`` part of ``path`` through the service proxy."""
    proxied = self_hub_proxied_path(namespace, service_name)
    return path.replace(STATIC_PREFIX, f"{proxied}{STATIC_PREFIX}", 1)


def cors_headers() -> dict[str, str]:
    """Return the CORS headers set on every proxied API response."""
    return dict(_CORS_HEADERS)


def port_forward_spec(src_port: int, dst_port: int) -> str:
    """Return the ``src:dst`` port mapping for a port-forward.

    Raises ValueError if a port does not fit in 16 bits.
    """
    for port in (src_port, dst_port):
        if not 0 <= port <= _MAX_PORT:
            raise ValueError(f"port out of range: {port}")
    return f"{src_port}:{dst_port}"