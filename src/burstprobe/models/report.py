# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Aggregate view over one burst of probes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .probe import ProbeOutcome, RateLimitSnapshot


@dataclass
class ProbeReport:
    """Outcomes of one burst, kept in the order they resolved."""

    url: str
    requested: int
    outcomes: list[ProbeOutcome] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, url: str, requested: int, outcomes: list[ProbeOutcome]) -> ProbeReport:
        return cls(url=url, requested=requested, outcomes=list(outcomes))

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.is_success)

    @property
    def rate_limited(self) -> int:
        return sum(1 for o in self.outcomes if o.is_rate_limited)

    @property
    def rejected(self) -> int:
        """Responses with a status that is neither 2xx nor 429."""
        return sum(1 for o in self.outcomes if o.has_status and not o.is_success and not o.is_rate_limited)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.has_status)

    @property
    def status_counts(self) -> dict[str, int]:
        counts = Counter("none" if o.status_code is None else str(o.status_code) for o in self.outcomes)
        return dict(sorted(counts.items()))

    @property
    def first_rate_limited(self) -> int | None:
        """Position (in resolution order) of the first 429, if any."""
        for position, outcome in enumerate(self.outcomes):
            if outcome.is_rate_limited:
                return position
        return None

    @property
    def latest_rate_limit(self) -> RateLimitSnapshot | None:
        for outcome in reversed(self.outcomes):
            if outcome.rate_limit is not None:
                return outcome.rate_limit
        return None

    def to_dict(self) -> dict[str, Any]:
        latest = self.latest_rate_limit
        return {
            "url": self.url,
            "requested": self.requested,
            "summary": {
                "total": self.total,
                "succeeded": self.succeeded,
                "rate_limited": self.rate_limited,
                "rejected": self.rejected,
                "failed": self.failed,
                "first_rate_limited": self.first_rate_limited,
            },
            "status_counts": self.status_counts,
            "rate_limit": latest.to_dict() if latest is not None else None,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


__all__ = ["ProbeReport"]
