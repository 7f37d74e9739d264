"""Reading and updating the tool's configuration and secret in the cluster."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from kubeshark.scripting import ConfigMapScript

log = logging.getLogger(__name__)

SUFFIX_SECRET = "secret"
SUFFIX_CONFIG_MAP = "config-map"
SECRET_LICENSE = "LICENSE"
CONFIG_POD_REGEX = "POD_REGEX"
CONFIG_NAMESPACES = "NAMESPACES"
CONFIG_EXCLUDED_NAMESPACES = "EXCLUDED_NAMESPACES"
CONFIG_SCRIPTING_ENV = "SCRIPTING_ENV"
CONFIG_INGRESS_ENABLED = "INGRESS_ENABLED"
CONFIG_INGRESS_HOST = "INGRESS_HOST"
CONFIG_PROXY_FRONT_PORT = "PROXY_FRONT_PORT"
CONFIG_AUTH_ENABLED = "AUTH_ENABLED"
CONFIG_AUTH_TYPE = "AUTH_TYPE"
CONFIG_AUTH_SAML_IDP_METADATA_URL = "AUTH_SAML_IDP_METADATA_URL"
CONFIG_SCRIPTING_SCRIPTS = "SCRIPTING_SCRIPTS"
CONFIG_SCRIPTING_ACTIVE_SCRIPTS = "SCRIPTING_ACTIVE_SCRIPTS"
CONFIG_PCAP_DUMP_ENABLE = "PCAP_DUMP_ENABLE"
CONFIG_TIME_INTERVAL = "TIME_INTERVAL"
CONFIG_MAX_TIME = "MAX_TIME"
CONFIG_MAX_SIZE = "MAX_SIZE"


class Store(Protocol):
    """The data of one configuration resource, read and written whole."""

    def load(self) -> dict[str, Any]: ...

    def save(self, data: Mapping[str, Any]) -> None: ...


class InMemoryStore:
    """A Store held in memory."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def load(self) -> dict[str, Any]:
        return dict(self.data)

    def save(self, data: Mapping[str, Any]) -> None:
        self.data = dict(data)


def get_config(store: Store, key: str) -> str:
    """Return the value of ``key``, or "" if it is not set."""
    return store.load().get(key, "")


def set_config(store: Store, key: str, value: str) -> bool:
    """Set ``key`` to ``value``; return True if the value changed."""
    data = store.load()
    updated = data.get(key, "") != value
    data[key] = value
    try:
        store.save(data)
    except Exception as err:
        log.error("config %s: %s", key, err)
        raise
    if updated:
        log.info(
            "Updated. Printing only 10 first characters of value: config=%s value=%s length=%d",
            key, value[:10], len(value),
        )
    return updated


def set_secret(store: Store, key: str, value: str) -> bool:
    """Store ``value`` under ``key`` as bytes; return True if it changed."""
    data = store.load()
    current = data.get(key, b"")
    if isinstance(current, bytes):
        current = current.decode("utf-8", errors="replace")
    updated = current != value
    data[key] = value.encode("utf-8")
    try:
        store.save(data)
    except Exception as err:
        log.error("secret %s: %s", key, err)
        raise
    if updated:
        log.info("Updated: secret=%s", key)
    return updated


def config_get_scripts(store: Store) -> dict[int, ConfigMapScript]:
    """Return the stored scripts keyed by their index.

    Raises json.JSONDecodeError if the stored value is not JSON.
    """
    raw = json.loads(get_config(store, CONFIG_SCRIPTING_SCRIPTS))
    if raw is None:
        return {}
    return {
        int(index): ConfigMapScript(
            title=str(entry.get("title", "")),
            code=str(entry.get("code", "")),
            active=bool(entry.get("active", False)),
        )
        for index, entry in raw.items()
    }


def is_active_script(store: Store, title: str) -> bool:
    """Return True if ``title`` occurs in the active scripts setting."""
    try:
        active = get_config(store, CONFIG_SCRIPTING_ACTIVE_SCRIPTS)
    except Exception:
        return False
    return title in active


def delete_active_script_by_title(store: Store, title: str) -> bool:
    """Remove ``title`` from the active scripts; return True if it was there."""
    active = get_config(store, CONFIG_SCRIPTING_ACTIVE_SCRIPTS).split(",")
    if title not in active:
        return False
    active.remove(title)
    set_config(store, CONFIG_SCRIPTING_ACTIVE_SCRIPTS, ",".join(active))
    return True