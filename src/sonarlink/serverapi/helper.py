# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Relative-path GET helper on top of AsyncHttpBridge."""

from __future__ import annotations

import logging

from ..config import ServerCredentials
from ..http.bridge import AsyncHttpBridge
from ..http.models import HttpResponse
from .classify import handle_error
from .url import concat

logger = logging.getLogger(__name__)


class ServerApiHelper:
    """
    Resolves API paths against the configured base URL and runs blocking GETs.

    `get` raises a ServerApiError subclass for any non-2xx answer; `raw_get`
    returns the response whatever its status.
    """

    def __init__(self, credentials: ServerCredentials, bridge: AsyncHttpBridge):
        self.credentials = credentials
        self._bridge = bridge

    def get(self, path: str) -> HttpResponse:
        response = self.raw_get(path)
        if not response.is_successful:
            error = handle_error(response)
            logger.debug("GET %s classified as %s", response.url, error.kind.value)
            raise error
        return response

    def raw_get(self, relative_path: str) -> HttpResponse:
        return self._bridge.get_async(self.build_endpoint_url(relative_path)).result()

    def build_endpoint_url(self, relative_path: str) -> str:
        return concat(self.credentials.base_url, relative_path)


__all__ = ["ServerApiHelper"]
