# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for burstprobe.

Every setting has an embedded default so the probe runs with no arguments;
environment variables are read when ``load_*_settings()`` is called.
"""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"burstprobe/{__version__}"
DEFAULT_TARGET_URL = "http://localhost:3001/api/v1/users/login"
DEFAULT_REQUEST_COUNT = 50
DEFAULT_EMAIL = "user1@example.com"
DEFAULT_PASSWORD = "Password123!"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        parsed = int(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """HTTP client defaults.

    ``timeout=None`` disables client timeouts entirely: a request the server
    never answers keeps the burst open.
    """

    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_connections: int | None = None
    max_body_bytes: int = 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("BURSTPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_optional_float_env("BURSTPROBE_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("BURSTPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("BURSTPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("BURSTPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_connections=_optional_int_env("BURSTPROBE_HTTP_MAX_CONNECTIONS", cls.max_connections),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class ProbeSettings:
    """What to send and how many times."""

    url: str = DEFAULT_TARGET_URL
    count: int = DEFAULT_REQUEST_COUNT
    email: str = DEFAULT_EMAIL
    password: str = DEFAULT_PASSWORD

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        return cls(
            url=os.getenv("BURSTPROBE_TARGET_URL", cls.url),
            count=_int_env("BURSTPROBE_REQUEST_COUNT", cls.count),
            email=os.getenv("BURSTPROBE_EMAIL", cls.email),
            password=os.getenv("BURSTPROBE_PASSWORD", cls.password),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_probe_settings() -> ProbeSettings:
    """Load the probe target and payload from environment, defaulting to the local login endpoint."""
    return ProbeSettings.from_env()
