# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL checks applied before a burst is dispatched."""

from __future__ import annotations

from urllib.parse import urlparse

from ..errors import ProbeConfigError

ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_absolute_http_url(url: str) -> bool:
    """Return True for ``http(s)://host[...]`` URLs."""
    parsed = urlparse(str(url or "").strip())
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.hostname)


def validate_probe_url(url: str) -> str:
    """Return the stripped URL or raise ProbeConfigError."""
    candidate = str(url or "").strip()
    if not is_absolute_http_url(candidate):
        raise ProbeConfigError(f"Target must be an absolute http(s) URL, got {url!r}")
    return candidate


__all__ = ["ALLOWED_SCHEMES", "is_absolute_http_url", "validate_probe_url"]
