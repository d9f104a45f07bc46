# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Concurrent probe runner.

Every probe is spawned into one task group before the runner suspends, so the
whole burst is on the wire before the first response is looked at. Each task
turns its own failure into an outcome; nothing a single request does can
cancel its siblings or end the burst early.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from ..config import DEFAULT_EMAIL, DEFAULT_PASSWORD, DEFAULT_REQUEST_COUNT, ProbeSettings
from ..errors import ProbeConfigError, error_category_to_reason
from ..http.client import AsyncHttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.url import validate_probe_url
from ..models import Credentials, ProbeOutcome, ProbeRequest

logger = logging.getLogger(__name__)

OutcomeSink = Callable[[str], None]

PROBE_HEADERS = {"Accept": "application/json"}


def format_outcome_line(outcome: ProbeOutcome) -> str:
    """``Request <index>: <status>``; the status is left empty when none was received."""
    status = "" if outcome.status_code is None else str(outcome.status_code)
    return f"Request {outcome.index}: {status}"


def print_line(line: str) -> None:
    print(line, flush=True)


def _validate_count(count: object) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ProbeConfigError(f"Request count must be a positive integer, got {count!r}")
    return count


class ProbeRunner:
    """Fires ``count`` identical login POSTs at ``url`` and reports each one as it resolves."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        url: str,
        *,
        count: int = DEFAULT_REQUEST_COUNT,
        credentials: Credentials | None = None,
        sink: OutcomeSink | None = print_line,
    ):
        self.http_client = http_client
        self.url = validate_probe_url(url)
        self.count = _validate_count(count)
        self.credentials = credentials or Credentials(DEFAULT_EMAIL, DEFAULT_PASSWORD)
        self.sink = sink

    @classmethod
    def from_settings(
        cls,
        http_client: AsyncHttpClient,
        settings: ProbeSettings,
        *,
        sink: OutcomeSink | None = print_line,
    ) -> ProbeRunner:
        return cls(
            http_client,
            settings.url,
            count=settings.count,
            credentials=Credentials(settings.email, settings.password),
            sink=sink,
        )

    def build_requests(self) -> list[ProbeRequest]:
        return [ProbeRequest(index=i, url=self.url, payload=self.credentials) for i in range(self.count)]

    async def run(self) -> list[ProbeOutcome]:
        """Dispatch the burst and return outcomes in resolution order once all have settled."""
        probes = self.build_requests()
        outcomes: list[ProbeOutcome] = []
        started = time.monotonic()
        logger.info("Dispatching %d probes to %s", len(probes), self.url)

        async with asyncio.TaskGroup() as group:
            for probe in probes:
                group.create_task(self._probe(probe, outcomes), name=f"probe-{probe.index}")

        logger.info("All %d probes resolved in %.3fs", len(outcomes), time.monotonic() - started)
        return outcomes

    async def _probe(self, probe: ProbeRequest, outcomes: list[ProbeOutcome]) -> None:
        request = HttpRequest(
            url=probe.url,
            method="POST",
            headers=dict(PROBE_HEADERS),
            json=probe.payload.to_payload(),
            correlation_id=probe.correlation_id,
        )
        started = time.monotonic()
        try:
            response = await self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse.from_exception(exc)

        outcome = ProbeOutcome.from_response(probe.index, response, elapsed=time.monotonic() - started)
        if not outcome.has_status:
            logger.debug(
                "Probe %d got no response (%s, %s): %s",
                probe.index,
                outcome.error_type,
                error_category_to_reason(outcome.category),
                outcome.error_message,
            )
        outcomes.append(outcome)
        if self.sink is not None:
            line = format_outcome_line(outcome)
            try:
                self.sink(line)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Could not write outcome line %r: %s: %s", line, type(exc).__name__, exc)


__all__ = ["OutcomeSink", "ProbeRunner", "format_outcome_line", "print_line"]
