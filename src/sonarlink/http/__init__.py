# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP bridge exports."""

from .bridge import AUTHORIZATION_HEADER, AsyncHttpBridge, bearer
from .handle import Cancellable, ResponseHandle
from .models import Headers, HttpResponse, PendingRequest, is_successful
from .transport import HttpxTransport, ResponseCallback, Transport

__all__ = [
    "AUTHORIZATION_HEADER",
    "AsyncHttpBridge",
    "Cancellable",
    "Headers",
    "HttpResponse",
    "HttpxTransport",
    "PendingRequest",
    "ResponseCallback",
    "ResponseHandle",
    "Transport",
    "bearer",
    "is_successful",
]
