# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Callback-driven request execution primitives."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol

import httpx

from ..config import HttpSettings, load_http_settings
from .handle import Cancellable
from .models import PendingRequest

logger = logging.getLogger(__name__)


class ResponseCallback(Protocol):
    """Receives exactly one of the three outcomes of a submitted request."""

    def completed(self, response: httpx.Response) -> None: ...

    def failed(self, exc: BaseException) -> None: ...

    def cancelled(self) -> None: ...


class Transport(Protocol):
    """Non-blocking request execution; safe for concurrent submissions."""

    def execute(self, request: PendingRequest, callback: ResponseCallback) -> Cancellable: ...

    def close(self) -> None:  # pragma: no cover - optional for fakes
        ...


class _InFlightCall:
    """A request queued on, or running in, the worker pool."""

    def __init__(self, client: httpx.Client, request: httpx.Request, callback: ResponseCallback):
        self._client = client
        self._request = request
        self._callback = callback
        self._lock = threading.Lock()
        self._interrupted = False
        self._settled = False
        self.future: Future[None] | None = None

    def run(self) -> None:
        try:
            response = self._client.send(self._request, stream=True)
        except Exception as exc:  # noqa: BLE001
            if self._settle():
                self._callback.failed(exc)
            else:
                self._callback.cancelled()
            return
        if self._settle():
            self._callback.completed(response)
        else:
            response.close()
            self._callback.cancelled()

    def _settle(self) -> bool:
        """Mark the call finished; False when it was interrupted first."""
        with self._lock:
            if self._interrupted:
                return False
            self._settled = True
            return True

    def on_future_done(self, future: Future[None]) -> None:
        if future.cancelled():
            self._callback.cancelled()

    def cancel(self) -> bool:
        if self.future is not None and self.future.cancel():
            return True
        with self._lock:
            if self._settled:
                return False
            self._interrupted = True
            return True


class HttpxTransport(Transport):
    """Runs requests on a shared httpx client from a pool of worker threads."""

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.Client | None = None,
        executor: ThreadPoolExecutor | None = None,
    ):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="sonarlink-http",
        )

    def _build_request(self, request: PendingRequest) -> httpx.Request:
        headers = dict(request.headers)
        headers.setdefault("User-Agent", self.settings.user_agent)
        content = request.body.encode("utf-8") if isinstance(request.body, str) else request.body
        return self._client.build_request(request.method, request.url, headers=headers, content=content)

    def execute(self, request: PendingRequest, callback: ResponseCallback) -> Cancellable:
        call = _InFlightCall(self._client, self._build_request(request), callback)
        call.future = self._executor.submit(call.run)
        call.future.add_done_callback(call.on_future_done)
        return call

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._client.close()


__all__ = ["HttpxTransport", "ResponseCallback", "Transport"]
