# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json
import logging

import pytest

from burstprobe.cli import main as cli_main
from burstprobe.cli.main import build_parser, main
from burstprobe.config import ProbeSettings
from burstprobe.http import HttpRequest, HttpResponse, StubHttpClient
from burstprobe.log import setup_logging
from burstprobe.runtime import BurstProbe


def _limited_after(allowed: int):
    def handler(request: HttpRequest) -> HttpResponse:
        status = 200 if int(request.correlation_id) < allowed else 429
        headers = {"X-RateLimit-Limit": str(allowed), "X-RateLimit-Type": "ip"}
        return HttpResponse(ok=True, status_code=status, headers=headers)

    return handler


@pytest.fixture
def stub(monkeypatch):
    client = StubHttpClient(handler=_limited_after(2))
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings=None: client)
    for name in ("BURSTPROBE_TARGET_URL", "BURSTPROBE_REQUEST_COUNT", "BURSTPROBE_EMAIL", "BURSTPROBE_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    return client


def test_build_parser_needs_no_arguments():
    args = build_parser().parse_args([])
    assert args.url is None
    assert args.count is None
    assert args.json is False
    assert args.summary is False

    args = build_parser().parse_args(["--url", "http://x/login", "--count", "5", "--json"])
    assert args.url == "http://x/login"
    assert args.count == 5
    assert args.json is True


def test_main_defaults_send_fifty_requests(stub, capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 50
    assert sorted(lines) == sorted(f"Request {i}: {200 if i < 2 else 429}" for i in range(50))
    assert stub.closed is True
    assert {r.url for r in stub.requests} == {"http://localhost:3001/api/v1/users/login"}
    assert stub.requests[0].json == {"email": "user1@example.com", "password": "Password123!"}


def test_main_flags_override_env(stub, capsys, monkeypatch):
    monkeypatch.setenv("BURSTPROBE_REQUEST_COUNT", "7")
    assert main(["--count", "3", "--email", "a@x.com", "--password", "p", "--url", "http://127.0.0.1:9/login"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert sorted(lines) == ["Request 0: 200", "Request 1: 200", "Request 2: 429"]
    assert {r.url for r in stub.requests} == {"http://127.0.0.1:9/login"}
    assert stub.requests[0].json == {"email": "a@x.com", "password": "p"}


def test_main_reads_count_from_env(stub, capsys, monkeypatch):
    monkeypatch.setenv("BURSTPROBE_REQUEST_COUNT", "4")
    main([])
    assert len(capsys.readouterr().out.splitlines()) == 4


def test_main_summary(stub, capsys):
    main(["--count", "5", "--summary"])
    out = capsys.readouterr().out
    assert "Request 4: 429" in out
    assert "Rate limited: 3" in out
    assert "Successful:   2" in out
    assert "Status codes: 200=2, 429=3" in out
    assert "limit=2" in out


def test_main_json_replaces_lines(stub, capsys):
    main(["--count", "3", "--json"])
    out = capsys.readouterr().out
    assert "Request 0:" not in out
    data = json.loads(out)
    assert data["summary"]["total"] == 3
    assert data["summary"]["rate_limited"] == 1
    assert sorted(o["index"] for o in data["outcomes"]) == [0, 1, 2]


@pytest.mark.parametrize("argv", [["--url", "localhost/login"], ["--count", "0"]])
def test_main_rejects_bad_config(stub, argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert stub.requests == []
    assert stub.closed is True


@pytest.mark.asyncio
async def test_burstprobe_facade_runs_and_closes():
    client = StubHttpClient(handler=_limited_after(1))
    lines = []
    async with BurstProbe(http_client=client) as probe:
        report = await probe.run(ProbeSettings(url="http://localhost/login", count=3), sink=lines.append)

    assert client.closed is True
    assert report.url == "http://localhost/login"
    assert report.requested == 3
    assert report.total == 3
    assert report.succeeded == 1
    assert report.rate_limited == 2
    assert len(lines) == 3


def test_setup_logging_explicit_level_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    stream = io.StringIO()
    try:
        setup_logging("debug", stream=stream)
        logging.getLogger("burstprobe.test").debug("hello")
        assert root.level == logging.DEBUG
        assert "DEBUG burstprobe.test: hello" in stream.getvalue()
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
