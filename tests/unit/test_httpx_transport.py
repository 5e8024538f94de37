# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
from concurrent.futures import CancelledError, ThreadPoolExecutor

import httpx
import pytest

from sonarlink.config import HttpSettings
from sonarlink.http.bridge import AsyncHttpBridge
from sonarlink.http.transport import HttpxTransport

URL = "https://sq.example/api/system/health"


def _transport(handler, executor=None):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpxTransport(HttpSettings(user_agent="UA/1.0"), client=client, executor=executor)


def test_authenticated_get_over_httpx():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"health": "GREEN"})

    transport = _transport(handler)
    try:
        response = AsyncHttpBridge(transport, token="tkn").get(URL)
        assert response.status_code == 200
        assert response.url == URL
        assert '"GREEN"' in response.body_as_text()
    finally:
        transport.close()

    assert seen[0].headers["Authorization"] == "Bearer tkn"
    assert seen[0].headers["User-Agent"] == "UA/1.0"


def test_anonymous_get_over_httpx():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    transport = _transport(handler)
    try:
        AsyncHttpBridge(transport, token="tkn").get_async_anonymous(URL).result(timeout=5)
    finally:
        transport.close()
    assert "Authorization" not in seen[0].headers


def test_post_sends_encoded_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201)

    transport = _transport(handler)
    try:
        response = AsyncHttpBridge(transport).post(URL, "application/json; charset=utf-8", '{"k": "é"}')
    finally:
        transport.close()
    assert response.status_code == 201
    assert seen[0].method == "POST"
    assert seen[0].content == '{"k": "é"}'.encode("utf-8")
    assert seen[0].headers["Content-Type"] == "application/json; charset=utf-8"


def test_transport_error_reaches_caller_unchanged():
    error = httpx.ConnectError("connection refused")

    def handler(request):
        raise error

    transport = _transport(handler)
    try:
        with pytest.raises(httpx.ConnectError) as exc_info:
            AsyncHttpBridge(transport).get(URL)
    finally:
        transport.close()
    assert exc_info.value is error


def test_cancel_before_start_never_reaches_network():
    gate = threading.Event()
    executor = ThreadPoolExecutor(max_workers=1)
    executor.submit(gate.wait, 5)
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    transport = _transport(handler, executor=executor)
    handle = AsyncHttpBridge(transport).get_async(URL)
    try:
        assert handle.cancel() is True
        assert handle.cancelled()
        with pytest.raises(CancelledError):
            handle.result(timeout=1)
    finally:
        gate.set()
        executor.shutdown(wait=True)
        transport.close()
    assert seen == []


def test_cancel_in_flight_discards_late_response():
    started = threading.Event()
    release = threading.Event()
    produced = []

    def handler(request):
        started.set()
        release.wait(5)
        response = httpx.Response(200, content=b"too late")
        produced.append(response)
        return response

    executor = ThreadPoolExecutor(max_workers=1)
    transport = _transport(handler, executor=executor)
    handle = AsyncHttpBridge(transport).get_async(URL)
    try:
        assert started.wait(5)
        assert handle.cancel() is True
        assert handle.cancelled()
    finally:
        release.set()
        executor.shutdown(wait=True)
        transport.close()
    assert produced[0].is_closed
    with pytest.raises(CancelledError):
        handle.result(timeout=1)


def test_cancel_after_completion_returns_false():
    transport = _transport(lambda request: httpx.Response(200))
    try:
        handle = AsyncHttpBridge(transport).get_async(URL)
        handle.result(timeout=5)
        assert handle.cancel() is False
        assert not handle.cancelled()
    finally:
        transport.close()


def test_concurrent_requests_share_one_client():
    def handler(request):
        return httpx.Response(200, text=request.url.path)

    transport = _transport(handler)
    bridge = AsyncHttpBridge(transport)
    try:
        handles = [bridge.get_async(f"https://sq.example/api/{i}") for i in range(8)]
        bodies = sorted(handle.result(timeout=5).body_as_text() for handle in handles)
    finally:
        transport.close()
    assert bodies == sorted(f"/api/{i}" for i in range(8))


def test_close_cancels_queued_requests():
    gate = threading.Event()
    executor = ThreadPoolExecutor(max_workers=1)
    executor.submit(gate.wait, 5)
    transport = _transport(lambda request: httpx.Response(200), executor=executor)
    handle = AsyncHttpBridge(transport).get_async(URL)
    transport.close()
    gate.set()
    executor.shutdown(wait=True)
    assert handle.cancelled()
