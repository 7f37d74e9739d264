"""HTTP helpers that tag requests so the traffic is not captured."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

import requests

X_KUBESHARK_CAPTURE_HEADER_KEY = "X-Kubeshark-Capture"
X_KUBESHARK_CAPTURE_HEADER_IGNORE_VALUE = "ignore"


class HttpStatusError(requests.HTTPError):
    """A response came back with a status other than 200."""

    def __init__(self, response: requests.Response) -> None:
        self.status_code = response.status_code
        self.body = response.text
        message = "got response with status code: {}, body: {}".format(
            self.status_code, self.body.replace("\n", ";")
        )
        super().__init__(message, response=response)


def add_ignore_capture_header(headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    """Mark ``headers`` so the request is ignored by capture; returns them."""
    headers[X_KUBESHARK_CAPTURE_HEADER_KEY] = X_KUBESHARK_CAPTURE_HEADER_IGNORE_VALUE
    return headers


def _check(response: requests.Response) -> requests.Response:
    # The hub answers only 200 on success.
    if response.status_code != 200:
        raise HttpStatusError(response)
    return response


def _request(
    method: str,
    url: str,
    session: requests.Session | None,
    timeout: float | None,
    **kwargs: Any,
) -> requests.Response:
    sender = session if session is not None else requests
    return _check(sender.request(method, url, timeout=timeout, **kwargs))


def get(url: str, session: requests.Session | None = None, timeout: float | None = None) -> requests.Response:
    """GET ``url``; raises HttpStatusError unless the status is 200."""
    headers = add_ignore_capture_header({})
    return _request("GET", url, session, timeout, headers=headers)


def post(
    url: str,
    body: bytes | str | None = None,
    session: requests.Session | None = None,
    license_key: str = "",
    timeout: float | None = None,
) -> requests.Response:
    """POST a JSON ``body`` to ``url`` with the license key header."""
    headers = add_ignore_capture_header({})
    headers["Content-Type"] = "application/json"
    headers["License-Key"] = license_key
    return _request("POST", url, session, timeout, headers=headers, data=body)


def do(
    request: requests.Request | requests.PreparedRequest,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> requests.Response:
    """Send a prepared or unprepared request; raises on a non-200 status."""
    if session is None:
        with requests.Session() as own_session:
            return do(request, own_session, timeout)
    if isinstance(request, requests.Request):
        request = session.prepare_request(request)
    return _check(session.send(request, timeout=timeout))