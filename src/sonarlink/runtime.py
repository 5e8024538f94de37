# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level SonarLink facade wiring transport, bridge and API helper."""

from __future__ import annotations

from collections.abc import Mapping

from .config import HttpSettings, LaunchConfiguration, ServerCredentials, load_http_settings
from .http.bridge import AsyncHttpBridge
from .http.models import HttpResponse
from .http.transport import HttpxTransport, Transport
from .serverapi.helper import ServerApiHelper


class SonarLink:
    """
    Convenience wrapper that shares one transport across every request.

    The bridge carries the credential token; the helper resolves paths against
    the credential base URL.
    """

    def __init__(
        self,
        credentials: ServerCredentials,
        *,
        settings: HttpSettings | None = None,
        transport: Transport | None = None,
    ):
        self.credentials = credentials
        self.transport = transport or HttpxTransport(settings or load_http_settings())
        self.bridge = AsyncHttpBridge(self.transport, credentials.token)
        self.api = ServerApiHelper(credentials, self.bridge)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        transport: Transport | None = None,
    ) -> "SonarLink":
        credentials = LaunchConfiguration.from_env(environ).credentials()
        return cls(credentials, transport=transport)

    def get(self, path: str) -> HttpResponse:
        return self.api.get(path)

    def raw_get(self, path: str) -> HttpResponse:
        return self.api.raw_get(path)

    def close(self) -> None:
        self.bridge.close()

    def __enter__(self) -> "SonarLink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
