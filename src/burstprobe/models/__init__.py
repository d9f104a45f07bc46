# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for burstprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .probe import Credentials, ProbeOutcome, ProbeRequest, RateLimitSnapshot
from .report import ProbeReport

__all__ = [
    "Credentials",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeReport",
    "ProbeRequest",
    "RateLimitSnapshot",
]
