# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""burstprobe CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..config import HttpSettings, ProbeSettings, load_http_settings, load_probe_settings
from ..errors import ProbeConfigError
from ..http import AsyncHttpClient, create_default_http_client
from ..log import setup_logging
from ..models import ProbeReport
from ..probe.runner import OutcomeSink, print_line
from ..runtime import BurstProbe
from ..version import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burstprobe",
        description="Fire a burst of concurrent login requests and print how each one resolves",
    )
    parser.add_argument("--url", help="Login endpoint to probe (default: BURSTPROBE_TARGET_URL or the local dev server)")
    parser.add_argument("--count", type=int, help="Number of concurrent requests (default: 50)")
    parser.add_argument("--email", help="Email sent in every request body")
    parser.add_argument("--password", help="Password sent in every request body")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request timeout in seconds (default: none, wait for every response)",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print status counts and the last rate-limit headers after the per-request lines",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output a JSON report instead of per-request lines",
    )
    parser.add_argument("--log-level", help="Logging level for diagnostics on stderr (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _apply_overrides(args: argparse.Namespace, probe: ProbeSettings, http: HttpSettings) -> None:
    if args.url is not None:
        probe.url = args.url
    if args.count is not None:
        probe.count = args.count
    if args.email is not None:
        probe.email = args.email
    if args.password is not None:
        probe.password = args.password
    if args.timeout is not None:
        http.timeout = args.timeout if args.timeout > 0 else None
    if args.ignore_ssl_errors:
        http.verify_ssl = False


def _print_json(report: ProbeReport) -> None:
    json.dump(report.to_dict(), sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _format_pairs(values: dict[str, Any]) -> str:
    return ", ".join(f"{key}={value}" for key, value in values.items())


def _print_summary(report: ProbeReport) -> None:
    print()
    print(f"Results for {report.url}")
    print(f"  Requests:     {report.total}")
    print(f"  Successful:   {report.succeeded}")
    print(f"  Rate limited: {report.rate_limited}")
    print(f"  Rejected:     {report.rejected}")
    print(f"  No response:  {report.failed}")
    if report.status_counts:
        print(f"  Status codes: {_format_pairs(report.status_counts)}")
    first = report.first_rate_limited
    if first is not None:
        print(f"  First 429 was response #{first + 1} to resolve")
    latest = report.latest_rate_limit
    if latest is not None:
        print(f"  Rate limit headers: {_format_pairs(latest.to_dict())}")


async def _run(http_client: AsyncHttpClient, settings: ProbeSettings, sink: OutcomeSink | None) -> ProbeReport:
    async with BurstProbe(http_client=http_client) as probe:
        return await probe.run(settings, sink=sink)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    http_settings = load_http_settings()
    probe_settings = load_probe_settings()
    _apply_overrides(args, probe_settings, http_settings)

    http_client = create_default_http_client(http_settings)
    sink = None if args.json else print_line

    try:
        report = asyncio.run(_run(http_client, probe_settings, sink))
    except ProbeConfigError as exc:
        parser.error(str(exc))

    if args.json:
        _print_json(report)
    elif args.summary:
        _print_summary(report)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
