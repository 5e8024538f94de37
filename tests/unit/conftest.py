# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest


class ManualCall:
    """Transport call resolved by the test."""

    def __init__(self, request, callback):
        self.request = request
        self.callback = callback
        self.cancel_result = True
        self.cancel_requests = 0
        self.raw = None

    def cancel(self):
        self.cancel_requests += 1
        return self.cancel_result

    def complete(self, status_code=200, content=b"", url=None, attach_request=True):
        kwargs = {}
        if attach_request:
            kwargs["request"] = httpx.Request(self.request.method, url or self.request.url)
        self.raw = httpx.Response(status_code, content=content, **kwargs)
        self.callback.completed(self.raw)
        return self.raw


class ManualTransport:
    """Records submissions and leaves their resolution to the test."""

    def __init__(self):
        self.calls: list[ManualCall] = []
        self.closed = False

    def execute(self, request, callback):
        call = ManualCall(request, callback)
        self.calls.append(call)
        return call

    def close(self):
        self.closed = True


class ImmediateTransport(ManualTransport):
    """Answers every submission synchronously from a route table."""

    def __init__(self, routes=None):
        super().__init__()
        self.routes = dict(routes or {})

    def execute(self, request, callback):
        call = super().execute(request, callback)
        status_code, content = self.routes.get(request.url, (404, b""))
        call.complete(status_code, content)
        return call


@pytest.fixture
def manual_transport():
    return ManualTransport()


@pytest.fixture
def immediate_transport():
    return ImmediateTransport()
