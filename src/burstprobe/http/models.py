# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the probe runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory, categorize_exception

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by AsyncHttpClient implementations.

    ``correlation_id`` stays client-side; it lets stubs and logs tie a request
    back to its probe without putting anything extra on the wire.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    json: Any = None
    timeout: float | None = None
    allow_redirects: bool | None = None
    correlation_id: str | None = None


@dataclass
class HttpResponse:
    """Normalized HTTP response. ``status_code is None`` means no response was obtained."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException) -> HttpResponse:
        """Wrap a transport failure so callers never have to catch it themselves."""
        return cls(
            ok=False,
            error_message=str(exc) or None,
            error_type=type(exc).__name__,
            error_category=categorize_exception(exc),
        )
