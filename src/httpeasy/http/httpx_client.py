# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper.

    Owns the underlying ``httpx.Client`` unless one is injected, in which case ``close`` leaves it open.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            follow_redirects=self.settings.follow_redirects,
            timeout=httpx.Timeout(self.settings.request_timeout, connect=self.settings.connect_timeout),
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if not any(name.lower() == "user-agent" for name in headers):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.request_timeout
        connect_timeout = request.connect_timeout if request.connect_timeout is not None else self.settings.connect_timeout

        resp = self._client.request(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            follow_redirects=request.follow_redirects,
        )

        encoding = resp.encoding or "utf-8"
        try:
            text = resp.content.decode(encoding, errors="replace")
        except LookupError:
            text = resp.content.decode("utf-8", errors="replace")

        return HttpResponse(
            status_code=resp.status_code,
            headers=list(resp.headers.multi_items()),
            text=text,
            url=str(resp.url),
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
