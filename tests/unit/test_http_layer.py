# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from burstprobe.config import HttpSettings
from burstprobe.errors import ErrorCategory, ProbeConfigError
from burstprobe.http import (
    AsyncHttpxClient,
    HttpRequest,
    HttpResponse,
    StubHttpClient,
    create_default_http_client,
    header_value,
    is_absolute_http_url,
    rate_limit_headers,
    validate_probe_url,
)


def _client(handler, settings=None) -> AsyncHttpxClient:
    return AsyncHttpxClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_httpx_client_success_sets_user_agent_and_reads_body():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["ua"] = request.headers.get("user-agent")
        return httpx.Response(401, headers={"X-Test": "1"}, text="invalid credentials")

    client = _client(handler, HttpSettings(user_agent="probe-test/1.0"))
    resp = await client.request(HttpRequest(url="http://example/login", method="POST", json={"a": 1}))
    await client.aclose()

    assert resp.ok is True
    assert resp.status_code == 401
    assert resp.text == "invalid credentials"
    assert resp.headers["x-test"] == "1"
    assert resp.url == "http://example/login"
    assert resp.meta["body_truncated"] is False
    assert captured["ua"] == "probe-test/1.0"


@pytest.mark.asyncio
async def test_httpx_client_keeps_caller_user_agent():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=request.headers["user-agent"])

    client = _client(handler)
    resp = await client.request(HttpRequest(url="http://example", headers={"User-Agent": "custom"}))
    assert resp.text == "custom"


def _redirecting_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/login":
        return httpx.Response(302, headers={"Location": "http://example/dashboard"})
    return httpx.Response(200, text="dashboard")


@pytest.mark.asyncio
async def test_httpx_client_honors_redirect_setting():
    client = _client(_redirecting_handler, HttpSettings(allow_redirects=False))
    resp = await client.request(HttpRequest(url="http://example/login", method="POST"))
    assert resp.status_code == 302
    assert resp.url == "http://example/login"


@pytest.mark.asyncio
async def test_httpx_client_follows_redirects_by_default_and_per_request_override_wins():
    client = _client(_redirecting_handler)
    followed = await client.request(HttpRequest(url="http://example/login"))
    assert followed.status_code == 200
    assert followed.url == "http://example/dashboard"

    pinned = await client.request(HttpRequest(url="http://example/login", allow_redirects=False))
    assert pinned.status_code == 302


@pytest.mark.asyncio
async def test_httpx_client_truncates_large_bodies():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=b"x" * 64)

    client = _client(handler, HttpSettings(max_body_bytes=10))
    resp = await client.request(HttpRequest(url="http://example"))
    assert resp.status_code == 200
    assert resp.content == b"x" * 10
    assert resp.meta["body_truncated"] is True
    assert resp.meta["body_bytes_read"] == 10


@pytest.mark.asyncio
async def test_httpx_client_converts_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client = _client(handler)
    resp = await client.request(HttpRequest(url="http://example", method="POST"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_type == "ReadTimeout"
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert "timed out" in resp.error_message


@pytest.mark.asyncio
async def test_stub_client_lookup_and_default():
    stub = StubHttpClient({"http://a": HttpResponse(ok=True, status_code=204)})
    assert (await stub.request(HttpRequest(url="http://a"))).status_code == 204
    missing = await stub.request(HttpRequest(url="http://b"))
    assert missing.ok is False
    assert missing.status_code is None
    assert [r.url for r in stub.requests] == ["http://a", "http://b"]
    await stub.aclose()
    assert stub.closed is True


@pytest.mark.asyncio
async def test_stub_client_accepts_sync_and_async_handlers():
    sync_stub = StubHttpClient(handler=lambda request: HttpResponse(ok=True, status_code=200))
    assert (await sync_stub.request(HttpRequest(url="http://a"))).status_code == 200

    async def async_handler(request):
        return HttpResponse(ok=True, status_code=int(request.correlation_id))

    async_stub = StubHttpClient(handler=async_handler)
    resp = await async_stub.request(HttpRequest(url="http://a", correlation_id="418"))
    assert resp.status_code == 418


def test_http_response_from_exception():
    resp = HttpResponse.from_exception(ConnectionRefusedError("refused"))
    assert resp.ok is False
    assert resp.error_type == "ConnectionRefusedError"
    assert resp.error_category == ErrorCategory.CONNECTION_ERROR


def test_create_default_http_client_uses_settings():
    settings = HttpSettings(timeout=3.0, verify_ssl=False)
    client = create_default_http_client(settings)
    assert isinstance(client, AsyncHttpxClient)
    assert client.settings is settings


def test_header_helpers_are_case_insensitive():
    headers = {"X-RateLimit-Remaining": "0", "retry-after": "30", "Content-Type": "application/json"}
    assert header_value(headers, "x-ratelimit-remaining") == "0"
    assert header_value(headers, "Retry-After") == "30"
    assert header_value(headers, "missing", "fallback") == "fallback"
    assert rate_limit_headers(headers) == {"remaining": "0", "retry_after": "30"}
    assert rate_limit_headers({}) == {}


def test_url_validation():
    assert is_absolute_http_url("https://api.example.com/login")
    assert not is_absolute_http_url("mailto:user@example.com")
    assert validate_probe_url("  http://localhost:3001/api/v1/users/login ") == "http://localhost:3001/api/v1/users/login"
    with pytest.raises(ProbeConfigError):
        validate_probe_url("not a url")
