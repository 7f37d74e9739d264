import io
import json

import pytest
import responses

from kubeshark.hub import ConnectionFailed, Connector
from kubeshark.httputil import (
    X_KUBESHARK_CAPTURE_HEADER_IGNORE_VALUE,
    X_KUBESHARK_CAPTURE_HEADER_KEY,
)
from kubeshark.pods import Pod

BASE = "http://hub.example.com/api"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def make_connector(retries=3):
    return Connector(BASE, retries=retries, timeout=1.0, license_key="placeholder", sleep_interval=0)


def test_connection_succeeds_first_try(mocked):
    mocked.add(responses.GET, f"{BASE}/echo", status=200)
    result = make_connector().test_connection("/echo")
    assert result is None
    assert len(mocked.calls) == 1
    headers = mocked.calls[0].request.headers
    assert headers[X_KUBESHARK_CAPTURE_HEADER_KEY] == X_KUBESHARK_CAPTURE_HEADER_IGNORE_VALUE


def test_connection_fails_after_all_retries(mocked):
    mocked.add(responses.GET, f"{BASE}/echo", status=500)
    with pytest.raises(ConnectionFailed) as info:
        make_connector(retries=3).test_connection("/echo")
    assert len(mocked.calls) == 3
    assert info.value.retries == 3
    assert BASE in str(info.value)


def test_connection_recovers_after_failure(mocked):
    mocked.add(responses.GET, f"{BASE}/echo", status=503)
    mocked.add(responses.GET, f"{BASE}/echo", status=200)
    result = make_connector(retries=3).test_connection("/echo")
    assert result is None
    assert len(mocked.calls) == 2
    assert mocked.calls[1].response.status_code == 200


def test_connection_with_zero_retries_fails_without_request(mocked):
    with pytest.raises(ConnectionFailed):
        make_connector(retries=0).test_connection("/echo")
    assert len(mocked.calls) == 0


def test_post_worker_pod_sends_pod_json_and_headers(mocked):
    mocked.add(responses.POST, f"{BASE}/pods/worker", status=200)
    pod = Pod(name="kubeshark-worker-1", namespace="default", phase="Running", containers=("sniffer",))
    assert make_connector().post_worker_pod(pod) is True
    request = mocked.calls[0].request
    sent = json.loads(request.body)
    assert sent["name"] == "kubeshark-worker-1"
    assert sent["containers"] == ["sniffer"]
    assert request.headers["License-Key"] == "placeholder"
    assert request.headers["Content-Type"] == "application/json"


def test_post_worker_pod_retries_on_bad_status(mocked):
    mocked.add(responses.POST, f"{BASE}/pods/worker", status=500)
    mocked.add(responses.POST, f"{BASE}/pods/worker", status=200)
    assert make_connector().post_worker_pod({"name": "w"}) is True
    assert len(mocked.calls) == 2


def test_post_worker_pod_gives_up_when_unreachable(mocked):
    assert make_connector().post_worker_pod({"name": "w"}) is False
    assert len(mocked.calls) == 1


def test_post_worker_pod_unserializable():
    assert make_connector().post_worker_pod({"bad": object()}) is False


def test_post_license_payload(mocked):
    mocked.add(responses.POST, f"{BASE}/license", status=200)
    assert make_connector().post_license("token") is True
    assert json.loads(mocked.calls[0].request.body) == {"license": "token"}


def test_post_pcaps_merge_writes_body(mocked):
    data = b"\xd4\xc3\xb2\xa1pcapdata"
    mocked.add(responses.POST, f"{BASE}/pcaps/merge", status=200, body=data)
    out = io.BytesIO()
    assert make_connector().post_pcaps_merge(out) is True
    assert out.getvalue() == data
    assert json.loads(mocked.calls[0].request.body) == {"query": ""}


def test_post_pcaps_merge_unreachable_writes_nothing(mocked):
    out = io.BytesIO()
    assert make_connector().post_pcaps_merge(out) is False
    assert out.getvalue() == b""