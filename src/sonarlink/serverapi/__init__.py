# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Server API access: URL resolution, GET helper and failure classification."""

from .classify import classify_failure, error_kind_for_status, handle_error, parse_json_error
from .helper import ServerApiHelper
from .url import concat

__all__ = [
    "ServerApiHelper",
    "classify_failure",
    "concat",
    "error_kind_for_status",
    "handle_error",
    "parse_json_error",
]
