# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import ClassVar

import httpx


class ErrorKind(str, Enum):
    """Kinds produced by status-code classification."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    GENERIC = "GENERIC"


class ErrorCategory(str, Enum):
    """Diagnostic category of a transport failure."""

    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class SonarLinkError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SonarLinkError):
    """Invalid or incomplete connection settings."""


class RequestDispatchError(SonarLinkError):
    """The transport refused to accept a request."""


class UnsupportedOperationError(SonarLinkError, NotImplementedError):
    """Operation the bridge deliberately does not provide."""


class ServerApiError(SonarLinkError):
    """
    Non-2xx answer from the server, classified by status code.

    `detail` is the human readable message; `status_code` and `url` are always
    populated so callers can report them even when `detail` is terse.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC

    def __init__(self, detail: str, *, status_code: int, url: str):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.url = url


class UnauthorizedError(ServerApiError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ServerApiError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(ServerApiError):
    kind = ErrorKind.NOT_FOUND


class ServerError(ServerApiError):
    kind = ErrorKind.SERVER_ERROR


class UnexpectedStatusError(ServerApiError):
    kind = ErrorKind.GENERIC


class ErrorBodyParseError(SonarLinkError):
    """An error response body could not be read as a JSON error document."""

    def __init__(self, message: str, *, status_code: int, url: str):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


ERROR_TYPES: dict[ErrorKind, type[ServerApiError]] = {
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.FORBIDDEN: ForbiddenError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.SERVER_ERROR: ServerError,
    ErrorKind.GENERIC: UnexpectedStatusError,
}


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    # httpx wraps the socket error; the cause tells DNS failures apart.
    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, (socket.gaierror, socket.herror)) or isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError, httpx.ProxyError, ConnectionError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while contacting the server",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Transport error",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ConfigurationError",
    "ERROR_TYPES",
    "ErrorBodyParseError",
    "ErrorCategory",
    "ErrorKind",
    "ForbiddenError",
    "NotFoundError",
    "RequestDispatchError",
    "ServerApiError",
    "ServerError",
    "SonarLinkError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "UnsupportedOperationError",
    "categorize_exception",
    "error_category_to_reason",
]
