# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

import httpx

from ..config import HttpSettings
from .client import HttpClient, TransportFactory
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses (or exceptions to raise) are registered per URL; every request is recorded.
    """

    def __init__(self, responses: dict[str, HttpResponse | BaseException] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.settings: list[HttpSettings] = []
        self.close_count = 0

    def add(self, url: str, response: HttpResponse | BaseException) -> None:
        self._responses[url] = response

    def factory(self) -> TransportFactory:
        """Return a transport factory handing out this stub and recording the settings it was built with."""

        def build(settings: HttpSettings) -> HttpClient:
            self.settings.append(settings)
            return self

        return build

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        outcome = self._responses.get(request.url)
        if outcome is None:
            raise httpx.ConnectError(f"No stubbed response configured for {request.url}")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.close_count += 1
