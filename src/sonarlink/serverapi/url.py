# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Endpoint URL helpers."""

from __future__ import annotations


def concat(base_url: str, relative_path: str) -> str:
    """
    Join a base URL and an API path with exactly one slash between them.

    Example:
      https://x/ + /api/foo -> https://x/api/foo
      https://x  + api/foo  -> https://x/api/foo

    Only the junction is touched; interior slashes of either side are kept.
    """
    base = base_url if base_url.endswith("/") else f"{base_url}/"
    path = relative_path[1:] if relative_path.startswith("/") else relative_path
    return base + path


__all__ = ["concat"]
