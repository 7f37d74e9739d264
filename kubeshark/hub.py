"""Client for the hub's HTTP API."""

from __future__ import annotations

import dataclasses
import json
import logging
import shutil
import time
from collections.abc import Mapping
from typing import Any, BinaryIO

import requests

from kubeshark.httputil import HttpStatusError, get, post

log = logging.getLogger(__name__)

DEFAULT_RETRIES = 3
DEFAULT_TIMEOUT = 2.0
DEFAULT_SLEEP = 1.0


class ConnectionFailed(ConnectionError):
    """The hub could not be reached within the allowed retries."""

    def __init__(self, url: str, retries: int) -> None:
        self.url = url
        self.retries = retries
        super().__init__(f"Couldn't reach the URL: {url} after {retries} retries!")


def _to_json(payload: Any) -> bytes:
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        payload = dataclasses.asdict(payload)
    elif isinstance(payload, Mapping):
        payload = dict(payload)
    return json.dumps(payload).encode("utf-8")


class Connector:
    """Talks to the hub at ``url``, retrying where the hub is not ready yet."""

    def __init__(
        self,
        url: str,
        retries: int = DEFAULT_RETRIES,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        license_key: str = "",
        sleep_interval: float = DEFAULT_SLEEP,
    ) -> None:
        self.url = url
        self.retries = retries
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.license_key = license_key
        self.sleep_interval = sleep_interval

    def _is_reachable(self, path: str) -> bool:
        try:
            get(f"{self.url}{path}", self.session, self.timeout)
        except requests.RequestException as err:
            log.debug("Not ready yet! url=%s err=%s", self.url, err)
            return False
        return True

    def test_connection(self, path: str = "") -> None:
        """Check that ``url + path`` answers 200; raises ConnectionFailed otherwise."""
        for _ in range(self.retries):
            if self._is_reachable(path):
                log.debug("Connection test passed successfully. url=%s", self.url)
                return
            time.sleep(5 * self.sleep_interval)
        raise ConnectionFailed(self.url, self.retries)

    def _post_until_ok(self, endpoint: str, body: bytes, what: str) -> requests.Response | None:
        """POST until the hub answers 200; None if the hub cannot be reached."""
        target = f"{self.url}{endpoint}"
        while True:
            try:
                return post(target, body, self.session, self.license_key, self.timeout)
            except HttpStatusError as err:
                log.warning("Failed %s. Retrying... %s", what, err)
            except requests.RequestException as err:
                log.debug("Giving up %s: %s", what, err)
                return None
            time.sleep(self.sleep_interval)

    def post_worker_pod(self, pod: Any) -> bool:
        """Report the worker pod to the hub; return True once it was accepted."""
        try:
            body = _to_json(pod)
        except (TypeError, ValueError) as err:
            log.error("Failed to marshal the Worker pod: %s", err)
            return False
        if self._post_until_ok("/pods/worker", body, "sending the Worker pod to Hub") is None:
            return False
        log.debug("Reported worker pod to Hub: %s", pod)
        return True

    def post_license(self, license: str) -> bool:
        """Send ``license`` to the hub; return True once it was accepted."""
        body = _to_json({"license": license})
        if self._post_until_ok("/license", body, "sending the license to Hub") is None:
            return False
        log.debug("Reported license to Hub.")
        return True

    def post_pcaps_merge(self, out: BinaryIO) -> bool:
        """Download the merged PCAP export into ``out``; return True on success."""
        body = _to_json({"query": ""})
        response = self._post_until_ok("/pcaps/merge", body, "exported PCAP download")
        if response is None:
            return False
        try:
            with response:
                for chunk in response.iter_content(chunk_size=64 * 1024):
                    out.write(chunk)
        except (OSError, requests.RequestException) as err:
            log.error("Failed writing PCAP export: %s", err)
            return False
        log.info("Downloaded exported PCAP: %s", getattr(out, "name", "<stream>"))
        return True


def copy_response(response: requests.Response, out: BinaryIO) -> None:
    """Copy the raw body of ``response`` into ``out``."""
    shutil.copyfileobj(response.raw, out)