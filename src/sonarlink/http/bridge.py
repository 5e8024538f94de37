# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bearer-authenticated bridge from callback transports to response handles."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

import httpx

from ..errors import RequestDispatchError, UnsupportedOperationError, categorize_exception
from .handle import ResponseHandle
from .models import HttpResponse, PendingRequest
from .transport import Transport

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"


def bearer(token: str) -> str:
    return f"Bearer {token}"


def _resolved_url(request: PendingRequest, raw: httpx.Response) -> str:
    try:
        return str(raw.request.url)
    except Exception:  # noqa: BLE001
        return request.url


class _HandleCallback:
    """Feeds transport callbacks into a ResponseHandle."""

    def __init__(self, handle: ResponseHandle, request: PendingRequest):
        self._handle = handle
        self._request = request

    def completed(self, response: httpx.Response) -> None:
        wrapped = HttpResponse(_resolved_url(self._request, response), response)
        if not self._handle.set_response(wrapped):
            # Lost the race against cancellation; nobody will read this body.
            response.close()

    def failed(self, exc: BaseException) -> None:
        logger.debug(
            "%s %s failed (%s): %s",
            self._request.method,
            self._request.url,
            categorize_exception(exc).value,
            exc,
        )
        self._handle.set_exception(exc)

    def cancelled(self) -> None:
        self._handle.set_cancelled()


class AsyncHttpBridge:
    """
    Issues requests through a non-blocking transport and hands back
    `ResponseHandle`s.

    When a token is configured every call except `get_async_anonymous` carries
    `Authorization: Bearer <token>`. Without a token requests go out
    unauthenticated. Blocking variants wait on the handle and re-raise transport
    failures unchanged.
    """

    def __init__(self, transport: Transport, token: str | None = None):
        self._transport = transport
        self._token = token

    def get(self, url: str) -> HttpResponse:
        return self._wait_for(self.get_async(url))

    def get_async(self, url: str) -> ResponseHandle:
        return self._execute(PendingRequest(url=url))

    def get_async_anonymous(self, url: str) -> ResponseHandle:
        return self._execute(PendingRequest(url=url, authenticated=False))

    def post(self, url: str, content_type: str, body: bytes | str) -> HttpResponse:
        return self._wait_for(self.post_async(url, content_type, body))

    def post_async(self, url: str, content_type: str, body: bytes | str) -> ResponseHandle:
        request = PendingRequest(url=url, method="POST", body=body, content_type=content_type)
        return self._execute(request)

    def delete_async(self, url: str, content_type: str, body: bytes | str) -> ResponseHandle:
        request = PendingRequest(url=url, method="DELETE", body=body, content_type=content_type)
        return self._execute(request)

    def get_event_stream(
        self,
        url: str,
        connection_listener: Any,
        message_consumer: Callable[[str], None],
    ) -> None:
        raise UnsupportedOperationError("Event streams are not supported")

    def close(self) -> None:
        self._transport.close()

    @staticmethod
    def _wait_for(handle: ResponseHandle) -> HttpResponse:
        return handle.result()

    def _headers_for(self, request: PendingRequest) -> dict[str, str]:
        headers = dict(request.headers)
        if request.content_type is not None:
            headers[CONTENT_TYPE_HEADER] = request.content_type
        if request.authenticated and self._token is not None:
            headers[AUTHORIZATION_HEADER] = bearer(self._token)
        return headers

    def _execute(self, request: PendingRequest) -> ResponseHandle:
        request = replace(request, headers=self._headers_for(request))
        logger.debug(
            "%s %s (authenticated=%s)",
            request.method,
            request.url,
            AUTHORIZATION_HEADER in request.headers,
        )

        handle = ResponseHandle()
        try:
            call = self._transport.execute(request, _HandleCallback(handle, request))
        except Exception as exc:
            raise RequestDispatchError(f"Unable to execute request: {exc}") from exc
        handle.bind(call)
        return handle


__all__ = ["AUTHORIZATION_HEADER", "AsyncHttpBridge", "bearer"]
