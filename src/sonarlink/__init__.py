# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SonarLink package entrypoint.

This package bridges a callback-driven HTTP transport to cancellable response
handles, authenticates requests with a SonarQube bearer token, and turns
non-2xx answers into a small set of typed errors tool code can branch on.
"""

from .config import HttpSettings, LaunchConfiguration, ServerCredentials, load_http_settings
from .errors import (
    ErrorBodyParseError,
    ErrorKind,
    ForbiddenError,
    NotFoundError,
    ServerApiError,
    ServerError,
    SonarLinkError,
    UnauthorizedError,
    UnexpectedStatusError,
    UnsupportedOperationError,
)
from .http import AsyncHttpBridge, HttpResponse, HttpxTransport, PendingRequest, ResponseHandle, Transport
from .log import setup_logging
from .runtime import SonarLink
from .serverapi import ServerApiHelper, concat
from .version import __version__

__all__ = [
    "AsyncHttpBridge",
    "ErrorBodyParseError",
    "ErrorKind",
    "ForbiddenError",
    "HttpResponse",
    "HttpSettings",
    "HttpxTransport",
    "LaunchConfiguration",
    "NotFoundError",
    "PendingRequest",
    "ResponseHandle",
    "ServerApiError",
    "ServerApiHelper",
    "ServerCredentials",
    "ServerError",
    "SonarLink",
    "SonarLinkError",
    "Transport",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "UnsupportedOperationError",
    "concat",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
