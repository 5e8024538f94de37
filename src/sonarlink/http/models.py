# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response data models shared by the bridge and its transports."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import httpx

Headers = dict[str, str]


@dataclass(frozen=True)
class PendingRequest:
    """One outgoing call, fully prepared before it is handed to a transport."""

    url: str
    method: str = "GET"
    body: bytes | str | None = None
    content_type: str | None = None
    authenticated: bool = True
    headers: Headers = field(default_factory=dict)


def is_successful(status_code: int) -> bool:
    return 200 <= status_code < 300


class HttpResponse:
    """
    Response returned by the bridge.

    The body is streamed lazily and can be read once; reading it releases the
    underlying connection. Use `close()` (or a `with` block) when the body is
    not needed.
    """

    def __init__(self, url: str, raw: httpx.Response):
        self.url = url
        self._raw = raw
        self._consumed = False
        self._lock = threading.Lock()

    @property
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._raw.headers

    @property
    def is_successful(self) -> bool:
        return is_successful(self.status_code)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def body_as_bytes(self) -> bytes:
        with self._lock:
            if self._consumed:
                raise RuntimeError(f"Response body for {self.url} was already consumed")
            self._consumed = True
        try:
            return self._raw.read()
        finally:
            self._raw.close()

    def body_as_text(self) -> str:
        content = self.body_as_bytes()
        encoding = self._raw.encoding or "utf-8"
        try:
            return content.decode(encoding, errors="replace")
        except LookupError:
            return content.decode("utf-8", errors="replace")

    def close(self) -> None:
        self._raw.close()

    def __enter__(self) -> "HttpResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def __repr__(self) -> str:
        return f"<HttpResponse [{self.status_code}] {self.url}>"


__all__ = ["Headers", "HttpResponse", "PendingRequest", "is_successful"]
