# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Translation of non-2xx responses into ServerApiError kinds."""

from __future__ import annotations

import json
from collections.abc import Callable

from ..errors import ERROR_TYPES, ErrorBodyParseError, ErrorKind, ServerApiError
from ..http.models import HttpResponse, is_successful

UNAUTHORIZED_MESSAGE = "Not authorized. Please check server credentials."
FORBIDDEN_MESSAGE = "Forbidden"

# Evaluated in order; the first match wins, anything else is GENERIC.
_STATUS_RULES: tuple[tuple[Callable[[int], bool], ErrorKind], ...] = (
    (lambda status: status == 401, ErrorKind.UNAUTHORIZED),
    (lambda status: status == 403, ErrorKind.FORBIDDEN),
    (lambda status: status == 404, ErrorKind.NOT_FOUND),
    (lambda status: status >= 500, ErrorKind.SERVER_ERROR),
)

# Only these kinds look at the response body.
_BODY_KINDS = frozenset({ErrorKind.FORBIDDEN, ErrorKind.GENERIC})


def error_kind_for_status(status_code: int) -> ErrorKind | None:
    """Return the error kind for a status code, or None for 2xx."""
    if is_successful(status_code):
        return None
    for matches, kind in _STATUS_RULES:
        if matches(status_code):
            return kind
    return ErrorKind.GENERIC


def parse_json_error(content: str) -> str | None:
    """
    Extract `errors[].msg` from a JSON error document, joined with ", ".

    Blank content or a document without `errors` yields None. Anything that is
    not shaped like an error document raises ValueError or TypeError.
    """
    if not content or not content.strip():
        return None
    document = json.loads(content)
    if not isinstance(document, dict):
        raise TypeError(f"expected a JSON object, got {type(document).__name__}")
    errors = document.get("errors")
    if errors is None:
        return None
    if not isinstance(errors, list):
        raise TypeError(f"expected 'errors' to be an array, got {type(errors).__name__}")
    messages = []
    for entry in errors:
        msg = entry.get("msg") if isinstance(entry, dict) else None
        if not isinstance(msg, str):
            raise TypeError(f"error entry without a string 'msg': {entry!r}")
        messages.append(msg)
    return ", ".join(messages)


def format_failed_response(status_code: int, url: str, error_msg: str | None = None) -> str:
    suffix = f": {error_msg}" if error_msg is not None else ""
    return f"Error {status_code} on {url}{suffix}"


def build_error(kind: ErrorKind, status_code: int, url: str, error_msg: str | None = None) -> ServerApiError:
    if kind is ErrorKind.UNAUTHORIZED:
        detail = UNAUTHORIZED_MESSAGE
    elif kind is ErrorKind.FORBIDDEN:
        detail = error_msg if error_msg is not None else FORBIDDEN_MESSAGE
    elif kind is ErrorKind.GENERIC:
        detail = format_failed_response(status_code, url, error_msg)
    else:
        detail = format_failed_response(status_code, url)
    return ERROR_TYPES[kind](detail, status_code=status_code, url=url)


def classify_failure(status_code: int, url: str, read_body: Callable[[], str]) -> ServerApiError | None:
    """
    Classify a response by status code.

    `read_body` is only called for kinds that carry a server message. A body
    that is not a valid JSON error document raises ErrorBodyParseError.
    """
    kind = error_kind_for_status(status_code)
    if kind is None:
        return None
    error_msg = None
    if kind in _BODY_KINDS:
        try:
            error_msg = parse_json_error(read_body())
        except (ValueError, TypeError) as exc:
            raise ErrorBodyParseError(
                f"Unparseable error body for {format_failed_response(status_code, url)}: {exc}",
                status_code=status_code,
                url=url,
            ) from exc
    return build_error(kind, status_code, url, error_msg)


def handle_error(response: HttpResponse) -> ServerApiError:
    """Classify a failed response; the response is closed on every path."""
    with response:
        error = classify_failure(response.status_code, response.url, response.body_as_text)
    if error is None:
        raise ValueError(f"{response!r} is not a failed response")
    return error


__all__ = [
    "FORBIDDEN_MESSAGE",
    "UNAUTHORIZED_MESSAGE",
    "build_error",
    "classify_failure",
    "error_kind_for_status",
    "format_failed_response",
    "handle_error",
    "parse_json_error",
]
