# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level burstprobe facade."""

from __future__ import annotations

from contextlib import suppress

from .config import HttpSettings, ProbeSettings, load_probe_settings
from .http.client import AsyncHttpClient, create_default_http_client
from .models import ProbeReport
from .probe.runner import OutcomeSink, ProbeRunner, print_line


class BurstProbe:
    """
    Convenience wrapper that owns one HTTP client and runs bursts through it.

    An injected client is closed along with the facade, the same as the
    default httpx-backed one.
    """

    def __init__(
        self,
        http_client: AsyncHttpClient | None = None,
        http_settings: HttpSettings | None = None,
    ):
        self.http_client = http_client or create_default_http_client(http_settings)

    async def run(
        self,
        settings: ProbeSettings | None = None,
        *,
        sink: OutcomeSink | None = print_line,
    ) -> ProbeReport:
        settings = settings or load_probe_settings()
        runner = ProbeRunner.from_settings(self.http_client, settings, sink=sink)
        outcomes = await runner.run()
        return ProbeReport.from_outcomes(runner.url, runner.count, outcomes)

    async def aclose(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "aclose"):
                await self.http_client.aclose()

    async def __aenter__(self) -> "BurstProbe":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()
