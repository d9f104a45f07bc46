# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process AsyncHttpClient implementations."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable

from .client import AsyncHttpClient
from .models import HttpRequest, HttpResponse

Handler = Callable[[HttpRequest], "HttpResponse | Awaitable[HttpResponse]"]


class StubHttpClient(AsyncHttpClient):
    """
    Deterministic, programmable AsyncHttpClient for tests and dry runs.

    Responses are looked up by URL; a ``handler`` (sync or async) takes
    precedence and can branch on ``request.correlation_id``. Exceptions raised
    by the handler propagate to the caller unchanged.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        handler: Handler | None = None,
    ):
        self._responses = responses or {}
        self._handler = handler
        self.requests: list[HttpRequest] = []
        self.closed = False

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self._handler is not None:
            result = self._handler(request)
            if inspect.isawaitable(result):
                result = await result
            return result
        if request.url in self._responses:
            return self._responses[request.url]
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        self.closed = True
