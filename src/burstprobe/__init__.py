# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
burstprobe package entrypoint.

Fires a burst of identical login requests at an HTTP endpoint and records how
each one resolves, to observe rate limiting from the outside. HTTP behavior is
abstracted behind an injectable async client interface, and domain objects are
modeled with typed dataclasses.
"""

from .config import HttpSettings, ProbeSettings, load_http_settings, load_probe_settings
from .errors import ErrorCategory, ProbeConfigError
from .http import (
    AsyncHttpClient,
    AsyncHttpxClient,
    HttpRequest,
    HttpResponse,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import Credentials, ProbeOutcome, ProbeReport, ProbeRequest
from .probe import ProbeRunner, format_outcome_line
from .runtime import BurstProbe
from .version import __version__

__all__ = [
    "AsyncHttpClient",
    "AsyncHttpxClient",
    "BurstProbe",
    "Credentials",
    "ErrorCategory",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "ProbeConfigError",
    "ProbeOutcome",
    "ProbeReport",
    "ProbeRequest",
    "ProbeRunner",
    "ProbeSettings",
    "StubHttpClient",
    "create_default_http_client",
    "format_outcome_line",
    "load_http_settings",
    "load_probe_settings",
    "setup_logging",
    "__version__",
]
