# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""One-shot, cancellable handle for an in-flight request."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Generator
from concurrent.futures import CancelledError
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextlib import suppress
from typing import Any, Protocol

from .models import HttpResponse

logger = logging.getLogger(__name__)

_PENDING = "PENDING"
_COMPLETED = "COMPLETED"
_FAILED = "FAILED"
_CANCELLED = "CANCELLED"


class Cancellable(Protocol):
    """Transport-side view of a submitted request."""

    def cancel(self) -> bool: ...


class ResponseHandle:
    """
    Eventual outcome of one request.

    Resolves exactly once to a response, a failure or cancellation; later
    resolution attempts are ignored. Callers may block on `result()`, register
    done callbacks, or `await` the handle from a running event loop.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._state = _PENDING
        self._response: HttpResponse | None = None
        self._exception: BaseException | None = None
        self._callbacks: list[Callable[["ResponseHandle"], Any]] = []
        self._call: Cancellable | None = None

    def bind(self, call: Cancellable) -> None:
        """Attach the transport call that cancellation is forwarded to."""
        with self._condition:
            if self._state == _PENDING:
                self._call = call

    # Resolution, driven by the transport callback. Each returns False when the
    # handle had already been resolved.

    def set_response(self, response: HttpResponse) -> bool:
        return self._resolve(_COMPLETED, response=response)

    def set_exception(self, exc: BaseException) -> bool:
        return self._resolve(_FAILED, exception=exc)

    def set_cancelled(self) -> bool:
        return self._resolve(_CANCELLED)

    def _resolve(
        self,
        state: str,
        *,
        response: HttpResponse | None = None,
        exception: BaseException | None = None,
    ) -> bool:
        with self._condition:
            if self._state != _PENDING:
                return False
            self._state = state
            self._response = response
            self._exception = exception
            self._call = None
            callbacks, self._callbacks = self._callbacks, []
            self._condition.notify_all()
        for callback in callbacks:
            self._invoke(callback)
        return True

    def _invoke(self, callback: Callable[["ResponseHandle"], Any]) -> None:
        try:
            callback(self)
        except Exception:
            logger.exception("Done callback %r raised", callback)

    def cancel(self) -> bool:
        """
        Ask the transport to interrupt the request.

        Returns True when the handle ends up cancelled, False when the request
        already completed or failed, or when the transport declined.
        """
        with self._condition:
            if self._state == _CANCELLED:
                return True
            if self._state != _PENDING:
                return False
            call = self._call
        if call is None or not call.cancel():
            return False
        self.set_cancelled()
        return self.cancelled()

    def cancelled(self) -> bool:
        with self._condition:
            return self._state == _CANCELLED

    def done(self) -> bool:
        with self._condition:
            return self._state != _PENDING

    def _wait(self, timeout: float | None) -> None:
        with self._condition:
            if not self._condition.wait_for(lambda: self._state != _PENDING, timeout=timeout):
                raise FutureTimeoutError()

    def result(self, timeout: float | None = None) -> HttpResponse:
        """Block until resolved; re-raise a transport failure unchanged."""
        self._wait(timeout)
        if self._state == _CANCELLED:
            raise CancelledError()
        if self._exception is not None:
            raise self._exception
        assert self._response is not None
        return self._response

    def exception(self, timeout: float | None = None) -> BaseException | None:
        self._wait(timeout)
        if self._state == _CANCELLED:
            raise CancelledError()
        return self._exception

    def add_done_callback(self, fn: Callable[["ResponseHandle"], Any]) -> None:
        """Run `fn(handle)` on resolution, immediately if already resolved."""
        with self._condition:
            if self._state == _PENDING:
                self._callbacks.append(fn)
                return
        self._invoke(fn)

    def __await__(self) -> Generator[Any, None, HttpResponse]:
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[HttpResponse] = loop.create_future()

        def _copy_outcome(handle: "ResponseHandle") -> None:
            if waiter.done():
                return
            if handle.cancelled():
                waiter.cancel()
            elif handle._exception is not None:
                waiter.set_exception(handle._exception)
            else:
                waiter.set_result(handle._response)

        def _on_done(handle: "ResponseHandle") -> None:
            # The event loop may already be closed when a late response arrives.
            with suppress(RuntimeError):
                loop.call_soon_threadsafe(_copy_outcome, handle)

        self.add_done_callback(_on_done)
        try:
            return (yield from waiter.__await__())
        except asyncio.CancelledError:
            self.cancel()
            raise

    def __repr__(self) -> str:
        return f"<ResponseHandle state={self._state}>"


__all__ = ["Cancellable", "ResponseHandle"]
