# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed AsyncHttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from .client import AsyncHttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def _build_timeout(value: float | None) -> httpx.Timeout:
    # httpx defaults to 5s; None here means "wait forever".
    return httpx.Timeout(value)


class AsyncHttpxClient(AsyncHttpClient):
    """Asynchronous httpx client wrapper sharing one connection pool across a burst."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=_build_timeout(self.settings.timeout),
            verify=self.settings.verify_ssl,
            limits=httpx.Limits(
                max_connections=self.settings.max_connections,
                max_keepalive_connections=self.settings.max_connections,
            ),
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)

        try:
            max_body_bytes = self.settings.max_body_bytes
            if max_body_bytes <= 0:
                max_body_bytes = 1024 * 1024

            timeout = request.timeout if request.timeout is not None else self.settings.timeout

            async with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                json=request.json,
                timeout=_build_timeout(timeout),
                follow_redirects=self.settings.allow_redirects if request.allow_redirects is None else request.allow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                async for chunk in resp.aiter_bytes():
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        truncated = True
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                },
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Request to %s failed: %s: %s", request.url, type(exc).__name__, exc)
            return HttpResponse.from_exception(exc)

    async def aclose(self) -> None:
        await self._client.aclose()
