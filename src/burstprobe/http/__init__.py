# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import AsyncHttpClient, create_default_http_client
from .headers import header_value, rate_limit_headers
from .httpx_client import AsyncHttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import is_absolute_http_url, validate_probe_url

__all__ = [
    "AsyncHttpClient",
    "AsyncHttpxClient",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "header_value",
    "is_absolute_http_url",
    "rate_limit_headers",
    "validate_probe_url",
]
