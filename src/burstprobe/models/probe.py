# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/outcome models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory
from ..http.headers import rate_limit_headers
from ..http.models import HttpResponse


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str

    def to_payload(self) -> dict[str, str]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True)
class ProbeRequest:
    index: int
    url: str
    payload: Credentials

    @property
    def correlation_id(self) -> str:
        return str(self.index)


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit headers as the server reported them on one response."""

    limit: str | None = None
    remaining: str | None = None
    reset: str | None = None
    type: str | None = None
    retry_after: str | None = None

    @classmethod
    def from_headers(cls, headers: dict[str, str] | None) -> RateLimitSnapshot | None:
        found = rate_limit_headers(headers)
        if not found:
            return None
        return cls(**found)

    def to_dict(self) -> dict[str, str]:
        return {key: value for key, value in self.__dict__.items() if value is not None}


@dataclass(frozen=True)
class ProbeOutcome:
    """Terminal result of one probe. ``status_code is None`` marks a transport failure."""

    index: int
    status_code: int | None = None
    error_type: str | None = None
    error_message: str | None = None
    category: ErrorCategory = ErrorCategory.NONE
    rate_limit: RateLimitSnapshot | None = None
    elapsed: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def has_status(self) -> bool:
        return self.status_code is not None

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @classmethod
    def from_response(cls, index: int, response: HttpResponse, *, elapsed: float = 0.0) -> ProbeOutcome:
        if response.status_code is None:
            category = response.error_category
            if category == ErrorCategory.NONE:
                category = ErrorCategory.UNKNOWN_ERROR
            return cls(
                index=index,
                error_type=response.error_type,
                error_message=response.error_message,
                category=category,
                elapsed=elapsed,
            )
        return cls(
            index=index,
            status_code=response.status_code,
            rate_limit=RateLimitSnapshot.from_headers(response.headers),
            elapsed=elapsed,
            metadata=dict(response.meta),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "index": self.index,
            "status_code": self.status_code,
            "elapsed": round(self.elapsed, 6),
        }
        if self.status_code is None:
            data["error_type"] = self.error_type
            data["error_message"] = self.error_message
            data["category"] = self.category.value
        if self.rate_limit is not None:
            data["rate_limit"] = self.rate_limit.to_dict()
        return data
