# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header lookup utilities.

HTTP header field names are case-insensitive (RFC 9110). Responses are stored
as plain dicts, so reads go through these helpers rather than ``dict.get``.
"""

from __future__ import annotations

from collections.abc import Mapping

RATE_LIMIT_HEADERS = {
    "limit": "X-RateLimit-Limit",
    "remaining": "X-RateLimit-Remaining",
    "reset": "X-RateLimit-Reset",
    "type": "X-RateLimit-Type",
    "retry_after": "Retry-After",
}


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    lower = str(name).lower()
    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def rate_limit_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Pick the rate-limit related headers out of a response, keyed by short name."""
    found: dict[str, str] = {}
    for short_name, header_name in RATE_LIMIT_HEADERS.items():
        value = header_value(headers, header_name)
        if value:
            found[short_name] = value
    return found


__all__ = ["RATE_LIMIT_HEADERS", "header_value", "rate_limit_headers"]
